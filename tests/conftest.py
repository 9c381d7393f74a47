"""Shared pytest fixtures: in-memory collaborators and fast settings."""

from __future__ import annotations

import asyncio

import pytest

from searchbox.config import IndexSettings, SearchSettings
from searchbox.domain.models import ContentSummary, IndexResponse


class FakeIndex:
    def __init__(self) -> None:
        self.responses: dict[tuple[str, ...], IndexResponse] = {}
        self.gates: dict[tuple[str, ...], asyncio.Event] = {}
        self.error: Exception | None = None
        self.calls: list[list[str]] = []
        self.call_times: list[float] = []

    async def search(self, required_terms) -> IndexResponse:
        terms = tuple(required_terms)
        self.calls.append(list(terms))
        self.call_times.append(asyncio.get_running_loop().time())
        gate = self.gates.get(terms)
        if gate is not None:
            await gate.wait()
        if self.error is not None:
            raise self.error
        return self.responses.get(terms, IndexResponse())


class FakeResolver:
    def __init__(self) -> None:
        self.summaries: dict[str, ContentSummary | Exception | None] = {}
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.latency = 0.01

    async def resolve(self, identifier: str) -> ContentSummary | None:
        self.calls.append(identifier)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.latency)
        finally:
            self.in_flight -= 1
        outcome = self.summaries.get(identifier)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def fake_index() -> FakeIndex:
    return FakeIndex()


@pytest.fixture
def fake_resolver() -> FakeResolver:
    return FakeResolver()


@pytest.fixture
def make_summary():
    def _make(page_id: int, title: str | None = None, image: str | None = None) -> ContentSummary:
        title = title or f"Page {page_id}"
        return ContentSummary(
            id=page_id,
            title=title,
            title_html=f"<i>{title}</i>",
            url=f"https://en.wikipedia.org/wiki/{title.replace(' ', '_')}",
            image=image,
            extract=f"{title} extract",
            extract_html=f"<p>{title} extract</p>",
        )

    return _make


@pytest.fixture
def settings() -> SearchSettings:
    return SearchSettings(
        debounce_seconds=0.02,
        request_timeout_seconds=5,
        index=IndexSettings(
            base_url="https://index.example",
            retry_base_delay=0,
        ),
        summaries={"base_url": "https://summaries.example/api/rest_v1"},
    )

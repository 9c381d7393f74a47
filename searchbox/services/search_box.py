"""Caller-facing search box wiring the clients, pipeline and state together."""

from __future__ import annotations

from typing import Callable

import httpx

from searchbox.config import SearchSettings, get_settings
from searchbox.domain.models import FulfilledResult, QuerySnapshot
from searchbox.services.debounce import DebounceController
from searchbox.services.fulfillment import IndexClient, Resolver, SearchPipeline
from searchbox.services.index_client import IndexQueryClient
from searchbox.services.query_state import QueryState, Subscriber
from searchbox.services.summaries import SummaryResolver


class SearchBox:
    """Owns the query state for one interactive session.

    The HTTP client is injected and never closed here; its owner manages
    its lifetime. Collaborators can be replaced, e.g. with fakes in tests.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        settings: SearchSettings | None = None,
        *,
        index_client: IndexClient | None = None,
        resolver: Resolver | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        if http_client is None and (index_client is None or resolver is None):
            raise ValueError("http_client is required unless both collaborators are provided")
        index_client = index_client or IndexQueryClient(http_client, self._settings)
        resolver = resolver or SummaryResolver(http_client, self._settings)
        self.state = QueryState()
        self._controller = DebounceController(
            SearchPipeline(index_client, resolver),
            self.state,
            delay_seconds=self._settings.debounce_seconds,
            cancel_in_flight=self._settings.cancel_in_flight,
        )

    def set_query(self, raw: str) -> None:
        self._controller.submit(raw)

    @property
    def snapshot(self) -> QuerySnapshot:
        return self.state.snapshot

    @property
    def query(self) -> str:
        return self.state.query

    @property
    def results(self) -> FulfilledResult | None:
        return self.state.results

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        return self.state.subscribe(callback)

    async def wait_idle(self) -> None:
        await self._controller.wait_idle()

    async def aclose(self) -> None:
        await self._controller.aclose()

    async def __aenter__(self) -> "SearchBox":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


__all__ = ["SearchBox"]

"""Resolve index identifiers into page summaries via the Wikipedia REST API."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from searchbox.config import SearchSettings
from searchbox.domain.models import ContentSummary
from searchbox.logging import logger
from searchbox.services.exceptions import ResolutionFailure


class SummaryResolver:
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: SearchSettings | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or SearchSettings()

    async def resolve(self, identifier: str) -> ContentSummary | None:
        """Return the summary for ``identifier`` or ``None`` if it cannot be fetched."""

        try:
            return await self.fetch(identifier)
        except ResolutionFailure as exc:
            logger.info("summary_lookup_failed", identifier=identifier, reason=exc.reason)
            return None

    async def fetch(self, identifier: str) -> ContentSummary:
        try:
            response = await self._client.get(
                self._summary_url(identifier),
                headers=self._headers(),
                timeout=self._settings.request_timeout_seconds,
                follow_redirects=True,
            )
        except httpx.TimeoutException as exc:
            raise ResolutionFailure(identifier, "timeout") from exc
        except httpx.HTTPError as exc:
            raise ResolutionFailure(identifier, str(exc) or exc.__class__.__name__) from exc

        if not response.is_success:
            raise ResolutionFailure(identifier, f"status {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise ResolutionFailure(identifier, "non-JSON body") from exc
        return _summary_from_payload(identifier, payload)

    def _summary_url(self, identifier: str) -> str:
        base = str(self._settings.summaries.base_url).rstrip("/")
        return f"{base}/page/summary/{quote(identifier, safe='')}"

    def _headers(self) -> dict[str, str]:
        user_agent = self._settings.summaries.user_agent
        if not user_agent:
            return {}
        return {"User-Agent": user_agent}


def _summary_from_payload(identifier: str, payload: Any) -> ContentSummary:
    if not isinstance(payload, dict):
        raise ResolutionFailure(identifier, "unexpected payload")
    try:
        desktop = (payload.get("content_urls") or {}).get("desktop") or {}
        thumbnail = payload.get("thumbnail") or {}
        return ContentSummary(
            id=payload["pageid"],
            title=payload["title"],
            title_html=payload.get("displaytitle") or payload["title"],
            url=desktop["page"],
            image=thumbnail.get("source"),
            extract=payload.get("extract") or "",
            extract_html=payload.get("extract_html") or "",
        )
    except (KeyError, TypeError, AttributeError, ValidationError) as exc:
        raise ResolutionFailure(identifier, f"malformed summary: {exc}") from exc


__all__ = ["SummaryResolver"]

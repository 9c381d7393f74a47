"""Client for the edge search worker that maps terms to ranked titles."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Iterable

import httpx
from pydantic import ValidationError

from searchbox.config import SearchSettings
from searchbox.domain.models import IndexResponse
from searchbox.logging import logger
from searchbox.services.exceptions import IndexUnavailable
from searchbox.utils.retry import retry_async
from searchbox.utils.tokens import limit_terms


class QueryMode(IntEnum):
    CONTAIN = 0
    REQUIRE = 1
    EXCLUDE = 2


def build_query(terms: Iterable[tuple[QueryMode, str]]) -> str:
    return "&".join(f"{int(mode)}_{term}" for mode, term in terms)


class IndexQueryClient:
    """Queries the term index; every term passed to :meth:`search` is required."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: SearchSettings | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or SearchSettings()

    async def search(
        self,
        required_terms: Iterable[str],
        continuation: int | None = None,
    ) -> IndexResponse:
        index_settings = self._settings.index
        terms = limit_terms(
            required_terms,
            max_terms=index_settings.max_query_terms,
            max_bytes=index_settings.max_query_bytes,
        )
        if not terms:
            return IndexResponse()

        params: dict[str, Any] = {
            "q": build_query((QueryMode.REQUIRE, term) for term in terms),
        }
        if continuation is not None:
            params["continuation"] = continuation

        async def _request():
            response = await self._client.get(
                self._search_url(),
                params=params,
                timeout=self._settings.request_timeout_seconds,
            )
            response.raise_for_status()
            return response

        try:
            response = await retry_async(
                _request,
                max_attempts=index_settings.max_attempts,
                base_delay=index_settings.retry_base_delay,
                retry_on=(httpx.HTTPError,),
                logger=logger,
                operation_name="index_query",
            )
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code if exc.response is not None else "unknown"
            logger.warning("index_query_failed", terms=terms, status_code=status_code)
            raise IndexUnavailable(f"Index query failed ({status_code})") from exc
        except httpx.HTTPError as exc:
            logger.warning("index_query_failed", terms=terms, error=str(exc))
            raise IndexUnavailable(f"Index query failed: {exc}") from exc

        return self._parse(response)

    def _search_url(self) -> str:
        return f"{str(self._settings.index.base_url).rstrip('/')}/search"

    @staticmethod
    def _parse(response: httpx.Response) -> IndexResponse:
        try:
            data = response.json()
        except ValueError as exc:
            raise IndexUnavailable("Index returned a non-JSON body") from exc
        if not isinstance(data, dict):
            raise IndexUnavailable("Index returned an unexpected payload")

        results = data.get("results")
        if results is None:
            results = []
        if not isinstance(results, list):
            raise IndexUnavailable("Index returned results that are not a list")
        continuation = data.get("continuation")
        more = data.get("more")
        if not isinstance(more, bool):
            more = continuation is not None
        try:
            return IndexResponse(
                results=tuple(str(item) for item in results),
                more=more,
                continuation=continuation,
            )
        except (TypeError, ValidationError) as exc:
            raise IndexUnavailable(f"Index returned an invalid payload: {exc}") from exc


__all__ = ["IndexQueryClient", "QueryMode", "build_query"]

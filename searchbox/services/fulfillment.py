"""Turn a set of search terms into a deduplicated, classified result."""

from __future__ import annotations

import asyncio
from typing import Callable, Iterable, Protocol, Sequence

from searchbox.domain.models import ContentSummary, FulfilledResult, IndexResponse
from searchbox.logging import logger


class IndexClient(Protocol):
    async def search(self, required_terms: Iterable[str]) -> IndexResponse: ...


class Resolver(Protocol):
    async def resolve(self, identifier: str) -> ContentSummary | None: ...


def classify(summaries: Sequence[ContentSummary | None], more: bool) -> FulfilledResult:
    """Drop failed lookups and repeated entity ids, then split by thumbnail.

    ``summaries`` must be in index order: the first occurrence of an entity
    id wins.
    """

    seen: set[int] = set()
    with_image: list[ContentSummary] = []
    without_image: list[ContentSummary] = []
    for summary in summaries:
        if summary is None or summary.id in seen:
            continue
        seen.add(summary.id)
        if summary.has_image:
            with_image.append(summary)
        else:
            without_image.append(summary)
    return FulfilledResult(
        with_image=tuple(with_image),
        without_image=tuple(without_image),
        count=len(with_image) + len(without_image),
        more=more,
    )


class SearchPipeline:
    """Index query followed by a concurrent summary lookup per identifier."""

    def __init__(self, index_client: IndexClient, resolver: Resolver) -> None:
        self._index = index_client
        self._resolver = resolver

    async def run(
        self,
        terms: Sequence[str],
        is_current: Callable[[], bool] | None = None,
    ) -> FulfilledResult | None:
        """Fulfil ``terms``; return ``None`` if superseded before the fan-out."""

        # IndexUnavailable propagates: the whole attempt fails.
        response = await self._index.search(terms)
        if is_current is not None and not is_current():
            return None
        summaries = await asyncio.gather(
            *(self._resolve_one(identifier) for identifier in response.results)
        )
        result = classify(summaries, response.more)
        logger.debug(
            "search_pipeline_completed",
            terms=list(terms),
            identifiers=len(response.results),
            resolved=sum(1 for summary in summaries if summary is not None),
            count=result.count,
            more=result.more,
        )
        return result

    async def _resolve_one(self, identifier: str) -> ContentSummary | None:
        try:
            return await self._resolver.resolve(identifier)
        except Exception as exc:
            logger.warning(
                "summary_resolution_error",
                identifier=identifier,
                error=str(exc),
                exception_type=exc.__class__.__name__,
            )
            return None


__all__ = ["SearchPipeline", "classify"]

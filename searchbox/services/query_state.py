"""Observable container for the current query and its fulfilled results."""

from __future__ import annotations

from typing import Callable

from searchbox.domain.models import FulfilledResult, QuerySnapshot
from searchbox.logging import logger

Subscriber = Callable[[QuerySnapshot], None]


class QueryState:
    """Holds the latest :class:`QuerySnapshot` and notifies subscribers.

    Only the debounce controller writes to it, always from the event loop
    thread, so no locking is needed.
    """

    def __init__(self, query: str = "") -> None:
        self._snapshot = QuerySnapshot(query=query)
        self._subscribers: list[Subscriber] = []

    @property
    def snapshot(self) -> QuerySnapshot:
        return self._snapshot

    @property
    def query(self) -> str:
        return self._snapshot.query

    @property
    def results(self) -> FulfilledResult | None:
        return self._snapshot.results

    @property
    def error(self) -> str | None:
        return self._snapshot.error

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def begin(self, query: str) -> None:
        self._replace(QuerySnapshot(query=query))

    def commit(self, result: FulfilledResult) -> None:
        self._replace(QuerySnapshot(query=self._snapshot.query, results=result))

    def fail(self, message: str) -> None:
        self._replace(QuerySnapshot(query=self._snapshot.query, error=message))

    def _replace(self, snapshot: QuerySnapshot) -> None:
        self._snapshot = snapshot
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception:
                logger.exception("query_state_subscriber_failed", query=snapshot.query)


__all__ = ["QueryState", "Subscriber"]

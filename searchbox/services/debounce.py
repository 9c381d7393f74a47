"""Debounce search-box input and keep stale attempts from reaching the state."""

from __future__ import annotations

import asyncio

from searchbox.logging import logger
from searchbox.services.exceptions import SearchError
from searchbox.services.fulfillment import SearchPipeline
from searchbox.services.query_state import QueryState
from searchbox.utils.tokens import tokenize

DEFAULT_DELAY_SECONDS = 0.25


class DebounceController:
    """Collapse rapid ``submit`` calls into one pipeline run per quiet period.

    Every submit mints a new generation. An attempt only commits if its
    generation is still the current one when the pipeline finishes, so
    responses arriving out of order are dropped.
    """

    def __init__(
        self,
        pipeline: SearchPipeline,
        state: QueryState,
        *,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
        cancel_in_flight: bool = False,
    ) -> None:
        self._pipeline = pipeline
        self._state = state
        self._delay = delay_seconds
        self._cancel_in_flight = cancel_in_flight
        self._generation = 0
        self._timer: asyncio.Task | None = None
        self._in_flight: set[asyncio.Task] = set()

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def delay_seconds(self) -> float:
        return self._delay

    @delay_seconds.setter
    def delay_seconds(self, value: float) -> None:
        """Change the quiet period used by later submits."""

        if value < 0:
            raise ValueError("delay_seconds must not be negative")
        self._delay = value

    def submit(self, raw: str) -> None:
        """Record ``raw`` as the query and (re)schedule an attempt for it."""

        self._state.begin(raw)
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._generation += 1
        if self._cancel_in_flight:
            for task in list(self._in_flight):
                task.cancel()
        self._timer = asyncio.create_task(self._fire_after_delay(self._generation, self._delay))

    async def wait_idle(self) -> None:
        """Wait until no attempt is scheduled or running."""

        while True:
            pending = [task for task in (self._timer, *self._in_flight) if task is not None and not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    async def aclose(self) -> None:
        tasks = [task for task in (self._timer, *self._in_flight) if task is not None]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._timer = None
        self._in_flight.clear()

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def _fire_after_delay(self, generation: int, delay: float) -> None:
        await asyncio.sleep(delay)
        # A submit during the sleep cancels this task, so reaching here means it fired.
        task = asyncio.current_task()
        self._timer = None
        if task is not None:
            self._in_flight.add(task)
        try:
            await self._run_attempt(generation)
        finally:
            if task is not None:
                self._in_flight.discard(task)

    async def _run_attempt(self, generation: int) -> None:
        query = self._state.query
        terms = tokenize(query)
        logger.debug("search_attempt_started", generation=generation, terms=terms)
        try:
            result = await self._pipeline.run(terms, is_current=lambda: self._is_current(generation))
        except SearchError as exc:
            self._finish_failed(generation, query, exc)
            return
        except Exception as exc:
            logger.exception("search_attempt_crashed", generation=generation, query=query)
            self._finish_failed(generation, query, exc)
            return

        if result is None or not self._is_current(generation):
            logger.debug(
                "search_attempt_discarded",
                generation=generation,
                current_generation=self._generation,
            )
            return
        self._state.commit(result)
        logger.info(
            "search_attempt_committed",
            generation=generation,
            query=query,
            count=result.count,
            more=result.more,
        )

    def _finish_failed(self, generation: int, query: str, exc: Exception) -> None:
        if not self._is_current(generation):
            logger.debug(
                "search_attempt_discarded",
                generation=generation,
                current_generation=self._generation,
                error=str(exc),
            )
            return
        logger.warning("search_attempt_failed", generation=generation, query=query, error=str(exc))
        self._state.fail(str(exc))


__all__ = ["DebounceController", "DEFAULT_DELAY_SECONDS"]

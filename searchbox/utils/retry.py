"""Async retry helper for collaborator clients."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, TypeVar

from searchbox.logging import logger as default_logger

T = TypeVar("T")
AsyncFactory = Callable[[], Awaitable[T]]


async def retry_async(
    operation: AsyncFactory[T],
    *,
    max_attempts: int = 1,
    base_delay: float = 0.5,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
    logger=None,
    operation_name: str = "operation",
) -> T:
    """Run ``operation`` up to ``max_attempts`` times with linear backoff.

    Only exceptions matching ``retry_on`` are retried; anything else, and the
    last failure, propagates unchanged. ``max_attempts=1`` disables retrying.
    """

    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")
    log = logger if logger is not None else default_logger

    for attempt in range(1, max_attempts + 1):
        try:
            return await operation()
        except retry_on as exc:
            if attempt >= max_attempts:
                raise
            delay = base_delay * attempt
            log.warning(
                "retrying_operation",
                operation=operation_name,
                attempt=attempt,
                max_attempts=max_attempts,
                delay=delay,
                error=str(exc),
            )
            await asyncio.sleep(delay)

    raise RuntimeError(f"{operation_name} failed after {max_attempts} attempts")


__all__ = ["retry_async"]

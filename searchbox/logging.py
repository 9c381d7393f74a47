"""Structured logging helpers."""

from __future__ import annotations

import logging

import structlog

SERVICE_NAME = "searchbox"


def configure_logging(level: int | str = logging.INFO, *, environment: str | None = None) -> None:
    """Render JSON events tagged with the service and, if given, the environment.

    ``level`` accepts the names used by ``SearchSettings.log_level``.
    """

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[logging.StreamHandler()],
    )
    structlog.contextvars.clear_contextvars()
    context = {"service": SERVICE_NAME}
    if environment:
        context["environment"] = environment
    structlog.contextvars.bind_contextvars(**context)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


logger = structlog.get_logger()

__all__ = ["configure_logging", "logger", "SERVICE_NAME"]

"""Interactive entrypoint: read queries from stdin, print committed results."""

from __future__ import annotations

import asyncio
import sys
from typing import TextIO

import httpx

from searchbox.config import get_settings
from searchbox.domain.models import QuerySnapshot
from searchbox.logging import configure_logging, logger
from searchbox.services.search_box import SearchBox


def _make_printer(stream: TextIO):
    def _print(snapshot: QuerySnapshot) -> None:
        if snapshot.pending:
            return
        stream.write(snapshot.model_dump_json() + "\n")
        stream.flush()

    return _print


async def run(stdin: TextIO = sys.stdin, stdout: TextIO = sys.stdout) -> None:
    settings = get_settings()
    configure_logging(settings.log_level, environment=settings.environment)

    loop = asyncio.get_running_loop()
    async with httpx.AsyncClient(timeout=settings.request_timeout_seconds) as client:
        async with SearchBox(client, settings) as search_box:
            search_box.subscribe(_make_printer(stdout))
            logger.info("searchbox_starting")
            while True:
                line = await loop.run_in_executor(None, stdin.readline)
                if not line:
                    break
                search_box.set_query(line.rstrip("\n"))
            await search_box.wait_idle()


def main() -> None:
    asyncio.run(run())


if __name__ == "__main__":
    main()

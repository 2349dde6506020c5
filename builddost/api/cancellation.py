"""Abandon in-flight work when the HTTP client disconnects."""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from fastapi import Request
import structlog

from builddost.errors import ClientDisconnected

logger = structlog.get_logger()

T = TypeVar("T")

DISCONNECT_POLL_INTERVAL = 0.5


async def run_until_disconnected(
    request: Request,
    work: Awaitable[T],
    poll_interval: float = DISCONNECT_POLL_INTERVAL,
) -> T:
    """Await ``work``, cancelling it if the client goes away first.

    Raises:
        ClientDisconnected: If the client disconnected before ``work`` finished
    """
    task = asyncio.ensure_future(work)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_interval)
            if done:
                return task.result()
            if await request.is_disconnected():
                logger.info("client_disconnected", action="cancel_generation")
                raise ClientDisconnected("Client disconnected")
    finally:
        if not task.done():
            task.cancel()

"""Request correlation middleware.

A plain ASGI middleware: the downstream app receives the server's own
``receive`` channel, so ``Request.is_disconnected()`` in handlers sees
``http.disconnect`` as soon as the client goes away.
"""

import time
import uuid

from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send
import structlog

CORRELATION_HEADER = "X-Correlation-ID"


class CorrelationMiddleware:
    """Bind correlation_id, method and path to structlog and log every request."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        correlation_id = Headers(scope=scope).get(
            CORRELATION_HEADER, f"req_{uuid.uuid4().hex[:8]}"
        )
        structlog.contextvars.bind_contextvars(
            correlation_id=correlation_id, method=scope["method"], path=scope["path"]
        )

        start = time.time()
        logger = structlog.get_logger()
        status_code = 500

        async def send_with_correlation_id(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                MutableHeaders(scope=message)[CORRELATION_HEADER] = correlation_id
            await send(message)

        try:
            await self.app(scope, receive, send_with_correlation_id)
            duration_ms = (time.time() - start) * 1000

            if status_code >= 500:  # noqa: PLR2004
                logger.error(
                    "http_request_failed",
                    status_code=status_code,
                    duration_ms=round(duration_ms, 2),
                )
            else:
                logger.info(
                    "http_request", status_code=status_code, duration_ms=round(duration_ms, 2)
                )
        except Exception as e:
            duration_ms = (time.time() - start) * 1000
            logger.error(
                "http_request_exception",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round(duration_ms, 2),
                exc_info=True,
            )
            raise
        finally:
            structlog.contextvars.clear_contextvars()

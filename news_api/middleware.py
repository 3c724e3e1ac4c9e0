"""
Per-request diagnostics for the News API.

An article listing costs between two statements (count + page) and four
(plus the topic and author existence checks), and a cache hit costs none.
``X-Query-Count`` makes that visible on every response, next to
``X-Response-Time-Ms``.
"""
import logging
import time
from contextvars import ContextVar

from sqlalchemy import event
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)

query_count_var: ContextVar[int] = ContextVar("query_count", default=0)


def install_query_counter(engine) -> None:
    """Bump ``query_count_var`` for each statement *engine* sends to the database."""

    @event.listens_for(engine.sync_engine, "before_cursor_execute")
    def _count_query(conn, cursor, statement, parameters, context, executemany):
        query_count_var.set(query_count_var.get() + 1)


class TimingMiddleware:
    """
    Stamp the diagnostic headers on each HTTP response and log one DEBUG
    line per request.

    Written as plain ASGI: handlers run in this task, so the counter they
    bump is the one read here.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        query_count_var.set(0)
        start = time.perf_counter()

        async def stamp_headers(message: Message) -> None:
            if message["type"] == "http.response.start":
                elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
                statements = query_count_var.get()
                message["headers"] = [
                    *message.get("headers", []),
                    (b"x-response-time-ms", str(elapsed_ms).encode()),
                    (b"x-query-count", str(statements).encode()),
                ]
                logger.debug(
                    "%s %s -> %s (%.2f ms, %d statements)",
                    scope["method"],
                    scope["path"],
                    message["status"],
                    elapsed_ms,
                    statements,
                )
            await send(message)

        await self.app(scope, receive, stamp_headers)

"""
Per-request context: request id, SQL statement count and timing.

``RequestContextMiddleware`` opens a ``RequestContext`` for each HTTP
request, echoes its id back as ``X-Request-ID`` and reports the elapsed
time and the number of statements the request issued. ``RequestIdFilter``
stamps the id onto every log record, so service log lines for one request
can be grepped together.
"""
import logging
import time
import uuid
from contextvars import ContextVar
from dataclasses import dataclass

from sqlalchemy import event
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


@dataclass
class RequestContext:
    request_id: str
    queries: int = 0


request_context: ContextVar[RequestContext | None] = ContextVar("request_context", default=None)


def current_request_id() -> str:
    ctx = request_context.get()
    return ctx.request_id if ctx else "-"


def install_query_counter(engine) -> None:
    """
    Count every SQL statement *engine* executes against the current request.

    Must be called once per engine (the pooled engine in ``database.py``,
    the SQLite engine in the test suite).
    """

    @event.listens_for(engine.sync_engine, "before_cursor_execute")
    def _count_query(conn, cursor, statement, parameters, context, executemany):
        ctx = request_context.get()
        if ctx is not None:
            ctx.queries += 1


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = current_request_id()
        return True


class RequestContextMiddleware:
    """
    Pure ASGI, so the context set here is the one the handlers see.

    Response headers: ``X-Request-ID`` (the caller's, or a fresh uuid4),
    ``X-Response-Time-Ms`` and ``X-Query-Count``.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        ctx = RequestContext(
            request_id=Headers(scope=scope).get("x-request-id") or uuid.uuid4().hex,
        )
        token = request_context.set(ctx)
        start = time.perf_counter()
        status_code = 500

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
                headers = list(message.get("headers", []))
                headers += [
                    (b"x-request-id", ctx.request_id.encode("latin-1")),
                    (b"x-response-time-ms", str(elapsed_ms).encode()),
                    (b"x-query-count", str(ctx.queries).encode()),
                ]
                message["headers"] = headers
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            logger.info(
                "%s %s -> %d (%.2f ms, %d queries)",
                scope["method"],
                scope["path"],
                status_code,
                (time.perf_counter() - start) * 1000,
                ctx.queries,
            )
            request_context.reset(token)

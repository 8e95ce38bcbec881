"""
Maps service exceptions onto HTTP responses.

Each ``ErrorKind`` gets its own status code and a ``code`` field in the
body, so clients never have to parse messages to tell failures apart.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from forum.exceptions import ErrorKind, ForumError

logger = logging.getLogger(__name__)


def _error_body(code: str, message: str, detail: dict | None = None) -> dict:
    return {"code": code, "message": message, "detail": detail}


async def forum_error_handler(request: Request, exc: ForumError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed with %s: %s", request.method, request.url.path, exc.kind, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.kind, exc.message, exc.detail),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"][1:]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content=_error_body(ErrorKind.VALIDATION_ERROR, "Validation failed", {"errors": errors}),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=_error_body("internal_error", "Internal server error"),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ForumError, forum_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

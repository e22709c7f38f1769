"""Translate exceptions into JSON error bodies.

Every error response has the shape ``{"detail": "<message>"}``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from backend.app.core.errors import AppException
from backend.app.middleware.request_id import HEADER

logger = logging.getLogger(__name__)

_LOCATION_ROOTS = {"body", "query", "path"}


def format_validation_error(exc: RequestValidationError) -> str:
    """Render the first pydantic error as ``"<field>: <reason>"``."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    # loc looks like ("body", "items", 0, "price") or ("query", "status")
    loc = [str(part) for part in first.get("loc", ()) if part not in _LOCATION_ROOTS]
    msg = str(first.get("msg", "Invalid value"))
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    if not loc:
        return msg
    return f"{'.'.join(loc)}: {msg}"


async def app_exception_handler(_request: Request, exc: AppException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Application error: %s", exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def validation_exception_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": format_validation_error(exc)})


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Unhandled exceptions become an opaque 500."""
    request_id = getattr(request.state, "request_id", None)
    logger.error(
        "Unhandled exception on %s %s [%s]",
        request.method,
        request.url.path,
        request_id,
        exc_info=exc,
    )
    headers = {HEADER: request_id} if request_id else None
    return JSONResponse(
        status_code=500, content={"detail": "Internal server error"}, headers=headers
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_exception_handler)

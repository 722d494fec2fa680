"""
Exception handlers that render every failure as an error envelope.
"""

import logging
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.core.exceptions import InternalError, TaskBoardError, UnauthenticatedError

logger = logging.getLogger(__name__)


def _field_name(loc: tuple | list) -> str:
    """Drop the 'body'/'query' prefix from a pydantic error location."""
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts)


def _error_message(error: dict[str, Any]) -> str:
    """Human message for a single request validation error."""
    ctx_error = (error.get("ctx") or {}).get("error")
    if isinstance(ctx_error, ValueError) and str(ctx_error):
        return str(ctx_error)

    field = _field_name(error.get("loc", ()))
    if error.get("type") == "missing":
        return f"{field.capitalize() or 'Request body'} is required"
    if error.get("type") == "json_invalid":
        return "Request body is not valid JSON"
    if field:
        return f"{field}: {error.get('msg', 'invalid value')}"
    return str(error.get("msg", "Invalid request"))


async def task_board_error_handler(request: Request, exc: TaskBoardError) -> JSONResponse:
    headers = None
    if isinstance(exc, UnauthenticatedError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def request_validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    errors = exc.errors()
    message = _error_message(errors[0]) if errors else "Invalid request"
    details = [
        {"field": _field_name(e.get("loc", ())), "message": _error_message(e)}
        for e in errors
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Validation Error", "message": message, "details": details},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    try:
        kind = HTTPStatus(exc.status_code).phrase
    except ValueError:
        kind = "Error"
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": kind, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    error = InternalError("An unexpected error occurred")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register error envelope handlers on the application.

    Args:
        app: FastAPI application instance.
    """
    app.add_exception_handler(TaskBoardError, task_board_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

"""
Exception handlers.

Map domain exceptions, validation failures and unexpected errors to the
uniform error body ``{"success": false, "message": ..., "errors"?, "stack"?}``.
"""

import logging
import traceback
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.exceptions import QuillpostError

from .dependencies import get_app_settings
from .models.errors import ErrorResponse, FieldError

logger = logging.getLogger(__name__)

_PYDANTIC_VALUE_ERROR_PREFIX = "Value error, "


def _field_name(loc: tuple) -> str:
    # Drop the "body"/"query" marker; nested locations are dotted
    parts = [str(part) for part in loc[1:]] if len(loc) > 1 else [str(part) for part in loc]
    return ".".join(parts) or "body"


def _field_errors(exc: RequestValidationError) -> list[FieldError]:
    errors = []
    for error in exc.errors():
        message = error.get("msg", "Invalid value")
        if message.startswith(_PYDANTIC_VALUE_ERROR_PREFIX):
            message = message[len(_PYDANTIC_VALUE_ERROR_PREFIX):]
        errors.append(FieldError(field=_field_name(tuple(error.get("loc", ()))), message=message))
    return errors


def _error_response(
    status_code: int,
    message: str,
    errors: Optional[list[FieldError]] = None,
    exc: Optional[BaseException] = None,
    headers: Optional[dict[str, Any]] = None,
) -> JSONResponse:
    stack = None
    if exc is not None and get_app_settings().debug:
        stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    body = ErrorResponse(message=message, errors=errors or None, stack=stack)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


async def handle_quillpost_error(request: Request, exc: QuillpostError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Server error on %s %s: %s", request.method, request.url.path, exc.message, exc_info=exc)

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    errors = [FieldError(**error) for error in exc.errors] if exc.errors else None
    return _error_response(exc.status_code, exc.message, errors, exc, headers)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(400, "Validation failed", _field_errors(exc))


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = f"Route {request.method} {request.url.path} not found"
    else:
        message = str(exc.detail)
    return _error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error_response(500, "Internal server error", exc=exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Install every handler on the application."""
    app.add_exception_handler(QuillpostError, handle_quillpost_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)

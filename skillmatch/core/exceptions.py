"""
Error taxonomy and the handlers that render it.

Route handlers are the only layer that turns failures into status codes.
The query layer returns ``None`` for missing rows and lets store errors
propagate; handlers either raise one of the classes below directly or pass
an unexpected exception through :func:`translate_failure`.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

logger = logging.getLogger(__name__)


class SkillMatchError(Exception):
    """Base error; renders as a generic 500."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None, *, error: Optional[str] = None):
        self.message = message or self.default_message
        self.error = error
        super().__init__(self.message)


class ValidationError(SkillMatchError):
    """Missing or malformed input. Raised before any storage access."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class NotFoundError(SkillMatchError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ConflictError(SkillMatchError):
    """Unique constraint violation or a state change that is no longer allowed."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class TransientStoreError(SkillMatchError):
    """Connection, pool-acquisition or timeout failure talking to the store."""

    default_message = "Database temporarily unavailable"


class DeliveryError(SkillMatchError):
    """Outbound mail could not be rendered or sent."""

    default_message = "Failed to send email"


def translate_failure(exc: Exception, message: str) -> SkillMatchError:
    """
    Map an unexpected exception to the taxonomy.

    Args:
        exc: The exception caught by a handler.
        message: Human readable message for the response body.

    Returns:
        A SkillMatchError carrying ``str(exc)`` for diagnostics.
    """
    if isinstance(exc, SkillMatchError):
        return exc
    if isinstance(exc, IntegrityError):
        return ConflictError(message, error=str(exc.orig))
    if isinstance(exc, (OperationalError, InterfaceError, PoolTimeoutError, OSError)):
        return TransientStoreError(message, error=str(exc))
    return SkillMatchError(message, error=str(exc))


def _error_body(message: str, error: Optional[str] = None) -> dict:
    body = {"success": False, "message": message}
    if error is not None:
        body["error"] = error
    return body


async def skillmatch_error_handler(request: Request, exc: SkillMatchError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message} ({exc.error})")
    # Diagnostics are only attached to server errors
    error = exc.error if exc.status_code >= 500 else None
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message, error))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid {field}: {first.get('msg')}" if field else first.get("msg", "Invalid request")
    else:
        message = "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=_error_body(message))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("Internal server error", str(exc)),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SkillMatchError, skillmatch_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

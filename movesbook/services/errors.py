"""
Error kinds raised by the service layer and their HTTP rendering.

Every user-visible failure is a ``MovesbookError`` subclass carrying a
status code; the handlers at the bottom of this module turn them into the
stable ``{"success": false, "error": ...}`` response shape.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

logger = logging.getLogger(__name__)


class MovesbookError(Exception):
    """Base exception for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, extra: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.extra = extra or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "error": self.message, **self.extra}


class Unauthorized(MovesbookError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class NotFound(MovesbookError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ValidationError(MovesbookError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Missing required fields"


class Conflict(MovesbookError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class InternalError(MovesbookError):
    pass


def database_error(error: SQLAlchemyError, message: str, conflict_message: Optional[str] = None) -> MovesbookError:
    """
    Map a storage failure to the error kind callers should see.

    Unique-constraint violations become ``Conflict`` when a conflict message
    is given; everything else becomes a generic ``InternalError``. The
    original error is only logged.
    """
    if conflict_message and isinstance(error, IntegrityError):
        logger.warning(f"Integrity violation: {error.orig}")
        return Conflict(conflict_message)

    logger.error(f"{message}: {error}")
    return InternalError(message)


async def movesbook_error_handler(request: Request, exc: MovesbookError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
        message = f"Invalid value for {location}: {first.get('msg')}" if location else first.get("msg")
    else:
        message = "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": message},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": "Internal server error"},
    )

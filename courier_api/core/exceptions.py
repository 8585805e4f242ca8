# courier_api/core/exceptions.py
from typing import Any, Dict, Optional

from fastapi import HTTPException, status
from sqlalchemy.exc import DBAPIError, SQLAlchemyError


class ServiceError(HTTPException):
    """Base error rendered as {success: false, message, error, details}"""

    def __init__(
        self,
        status_code: int,
        message: str,
        error: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=message)
        self.message = message
        self.error = error
        self.details = details


class ValidationError(ServiceError):
    """Missing required input. Raised before any database call."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(status.HTTP_400_BAD_REQUEST, message, details=details)


class NotFoundError(ServiceError):
    def __init__(self, message: str = "Courier not found"):
        super().__init__(status.HTTP_404_NOT_FOUND, message)


class PersistenceError(ServiceError):
    """Any database failure: connectivity, constraint, or an error raised by a stored routine"""

    def __init__(self, message: str, cause: SQLAlchemyError):
        super().__init__(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            message,
            error=describe_db_error(cause)
        )
        self.cause = cause


def describe_db_error(exc: SQLAlchemyError) -> str:
    """Driver message without SQLAlchemy's statement/background decoration.

    PyMySQL errors carry ``(errno, message)`` args, e.g. a ``SIGNAL`` raised
    inside ``UpdateCourierStatus`` arrives as ``(1644, 'Invalid status')``.
    """
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        args = getattr(exc.orig, "args", ())
        if len(args) == 2 and isinstance(args[0], int):
            return str(args[1])
        return str(exc.orig)
    return str(exc)

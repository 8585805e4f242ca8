# courier_api/core/handlers.py
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from courier_api.shared.schemas.common import ErrorResponse
from .exceptions import ServiceError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, body: ErrorResponse, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body, exclude_none=True),
        headers=headers
    )


def setup_exception_handlers(app: FastAPI):
    """Render every error with the same success/message/error envelope"""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if isinstance(exc, ServiceError):
            body = ErrorResponse(message=exc.message, error=exc.error, details=exc.details)
        else:
            body = ErrorResponse(message=str(exc.detail))

        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} - {body.message}: {body.error}")

        return _error_response(exc.status_code, body, getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        body = ErrorResponse(
            message="Invalid request",
            details={"errors": jsonable_encoder(exc.errors())}
        )
        return _error_response(status.HTTP_400_BAD_REQUEST, body)

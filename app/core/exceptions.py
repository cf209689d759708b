"""
Application error taxonomy

Every failure a request can end with is one of these. They are raised by
dependencies and services and rendered to JSON by the handlers registered
in app.main, so route functions never build error responses by hand.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that terminate a request"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message or self.message
        self.details = details
        self.headers = headers
        super().__init__(self.message)

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(AppError):
    """Request payload failed validation (field-level details attached)"""
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request data"


class AuthenticationError(AppError):
    """Missing, malformed, expired or forged credentials"""
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Authentication required"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        super().__init__(message, details, headers={"WWW-Authenticate": "Bearer"})


class AuthorizationError(AppError):
    """Authenticated, but not allowed to touch this resource"""
    status_code = status.HTTP_403_FORBIDDEN
    message = "Forbidden"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    message = "Resource already exists"


class InternalError(AppError):
    """Persistence or infrastructure failure; the cause is logged, never returned"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_body(),
        headers=exc.headers,
    )


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Render FastAPI's body/query parsing errors with the same 400 shape"""
    details = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return await app_error_handler(
        request,
        ValidationError("Invalid request data", details=details)
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Unhandled persistence failures become a generic 500"""
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return await app_error_handler(request, InternalError())

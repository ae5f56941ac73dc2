# app/core/errors.py
"""Domain errors and the handlers that render them as API envelopes.

Every error carries the HTTP status it maps to, so services raise them
directly and routers never translate them by hand.
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Server error"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Dict[str, Any]]] = None):
        self.message = message or self.message
        self.errors = errors
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid data"


class DuplicateEmail(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "A user with this email already exists"


class WrongCurrentPassword(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Current password is incorrect"


class ConstraintViolation(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Performance data already exists for this period"


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials"


class MissingToken(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Not authorized - token missing"


class TokenInvalid(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid token"


class TokenExpired(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Token expired"


class UserNotFound(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid token - user not found"


class AccountInactive(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Account inactive. Contact the administrator."


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Access denied"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Resource not found"


class AccountBlocked(AppError):
    status_code = status.HTTP_423_LOCKED
    message = "Account blocked. Contact the administrator."


class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Server error"


def _envelope(status_code: int, message: str, errors=None, headers=None) -> JSONResponse:
    content: Dict[str, Any] = {"success": False, "message": message}
    if errors:
        content["errors"] = jsonable_encoder(errors)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        headers = None
        if exc.status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}
        if isinstance(exc, InternalError):
            logger.error("Internal error on %s %s: %s", request.method, request.url.path, exc.message)
            return _envelope(exc.status_code, InternalError.message)
        return _envelope(exc.status_code, exc.message, exc.errors, headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
                "message": err.get("msg"),
            }
            for err in exc.errors()
        ]
        return _envelope(status.HTTP_400_BAD_REQUEST, ValidationError.message, errors)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _envelope(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, InternalError.message)

"""
Application error taxonomy and the JSON error envelope.

Every failure leaves the API as ``{"success": false, "message": ...}``,
optionally with a stable ``code``. Internal exception detail is only
echoed back while running in development mode.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)

_VALUE_ERROR_PREFIX = "Value error, "


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code: str = "SERVER_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code


class ValidationError(AppError):
    """Missing or malformed input (400)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "VALIDATION_ERROR"


class DuplicateUsernameError(ValidationError):
    """Username already taken, compared case-insensitively (400)."""

    default_code = "DUPLICATE_USERNAME"


class AuthenticationError(AppError):
    """Bad credentials or a missing, invalid, expired or revoked token (401)."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_code = "AUTHENTICATION_FAILED"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = "NOT_FOUND"


class PersistenceError(AppError):
    """The store stayed unavailable after all retry attempts (500)."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code = "PERSISTENCE_ERROR"


def error_response(
    status_code: int,
    message: str,
    code: Optional[str] = None,
    error: Optional[str] = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    content = {"success": False, "message": message}
    if code:
        content["code"] = code
    if error is not None:
        content["error"] = error
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _validation_message(exc: RequestValidationError) -> str:
    # Surface the model validator's own message instead of pydantic's wrapper
    for err in exc.errors():
        if err.get("type") != "value_error":
            continue
        ctx_error = (err.get("ctx") or {}).get("error")
        if ctx_error is not None:
            return str(ctx_error)
        msg = err.get("msg", "")
        if msg.startswith(_VALUE_ERROR_PREFIX):
            return msg[len(_VALUE_ERROR_PREFIX):]
    return "Data yang dikirim tidak valid"


def register_exception_handlers(app: FastAPI, expose_errors: bool = False) -> None:
    """Install handlers rendering every failure as the JSON error envelope."""

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        log_fn = logger.error if exc.status_code >= 500 else logger.info
        log_fn(
            "%s %s -> %s %s",
            request.method,
            request.url.path,
            exc.status_code,
            exc.code,
        )
        headers = None
        if isinstance(exc, AuthenticationError):
            headers = {"WWW-Authenticate": "Bearer"}
        return error_response(exc.status_code, exc.message, exc.code, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            _validation_message(exc),
            ValidationError.default_code,
        )

    @app.exception_handler(HTTPException)
    async def handle_http_exception(request: Request, exc: HTTPException):
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return error_response(exc.status_code, message, headers=exc.headers)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Server error",
            error=str(exc) if expose_errors else None,
        )

"""Error taxonomy and the handlers that turn errors into response envelopes.

Handlers raise one of the ``AppError`` subclasses below; anything else that
escapes a route is logged and reported to the client as a bare 500.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map directly to an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequest(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "BAD_REQUEST"
    default_message = "Invalid request"


class InvalidCredentials(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "INVALID_CREDENTIALS"
    default_message = "Invalid credentials"


class MissingCredential(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "MISSING_CREDENTIAL"
    default_message = "Authorization token required"


class InvalidToken(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "INVALID_TOKEN"
    default_message = "Invalid or expired token"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"
    default_message = "Access denied"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    default_message = "Not found"


class SubscriptionLimitExceeded(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "SUBSCRIPTION_LIMIT"
    default_message = "Free plan limit reached. Upgrade to Pro for unlimited notes."


class AlreadyOnPlan(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "ALREADY_ON_PLAN"
    default_message = "Tenant is already on Pro plan"


class Internal(AppError):
    pass


# ── Envelope rendering ───────────────────────────────────────

def error_response(status_code: int, error: str, code: str | None = None) -> JSONResponse:
    body: dict = {"success": False, "error": error}
    if code:
        body["code"] = code
    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=status_code, content=body, headers=headers)


async def _app_error_handler(_request: Request, exc: AppError) -> JSONResponse:
    return error_response(exc.status_code, exc.message, exc.code)


async def _validation_error_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Request validation failed: %s", exc.errors())
    return error_response(status.HTTP_400_BAD_REQUEST, BadRequest.default_message, BadRequest.code)


async def _http_error_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def _store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, Internal.default_message, Internal.code)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, Internal.default_message, Internal.code)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, _store_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error_handler)

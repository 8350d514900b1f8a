"""Application exceptions and their JSON error envelope."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from statusboard.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base exception for all app-level errors."""

    def __init__(
        self,
        error: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        code: str | None = None,
        message: str | None = None,
        headers: dict[str, str] | None = None,
    ):
        self.error = error
        self.status_code = status_code
        self.code = code
        self.message = message
        self.headers = headers
        super().__init__(error)

    def to_response(self) -> ErrorResponse:
        """Convert to API response schema."""
        return ErrorResponse(error=self.error, code=self.code, message=self.message)


class InvalidInputError(AppError):
    """Raised when a request body is missing or malformed."""

    def __init__(self, error: str):
        super().__init__(error, status.HTTP_400_BAD_REQUEST, code="INVALID_INPUT")


class InvalidStatusError(AppError):
    """Raised when a status id does not name an existing status."""

    def __init__(self, status_id: int):
        self.status_id = status_id
        super().__init__("Invalid status ID", status.HTTP_400_BAD_REQUEST, code="INVALID_STATUS")


class NotFoundError(AppError):
    """Raised when a referenced resource doesn't exist."""

    def __init__(self, error: str, code: str = "NOT_FOUND"):
        super().__init__(error, status.HTTP_404_NOT_FOUND, code=code)


class UserNotFoundError(NotFoundError):
    """Raised when a user row is missing at lookup or write time."""

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__("User not found", code="USER_NOT_FOUND")


class InvalidCredentialsError(AppError):
    """Raised when a username/password pair doesn't match."""

    def __init__(self):
        super().__init__("Invalid username or password", status.HTTP_401_UNAUTHORIZED)


class AuthError(AppError):
    """Raised by the auth gate when a request can't be authenticated."""

    def __init__(self, error: str, code: str, status_code: int = status.HTTP_401_UNAUTHORIZED):
        super().__init__(error, status_code, code=code, headers={"WWW-Authenticate": "Bearer"})


class NoTokenError(AuthError):
    def __init__(self):
        super().__init__("Access token required", "NO_TOKEN")


class TokenExpiredAuthError(AuthError):
    def __init__(self):
        super().__init__("Token expired", "TOKEN_EXPIRED")


class InvalidTokenAuthError(AuthError):
    """A token that fails verification is refused with 403, not 401."""

    def __init__(self):
        super().__init__("Invalid token", "INVALID_TOKEN", status.HTTP_403_FORBIDDEN)


class AuthUserNotFoundError(AuthError):
    """The token is valid but its user no longer exists."""

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__("User not found", "USER_NOT_FOUND")


class StoreUnavailableError(AppError):
    """Raised when the database can't serve a request."""

    def __init__(self, message: str | None = None):
        super().__init__("Database error", code="STORE_UNAVAILABLE", message=message)


class TokenError(Exception):
    """Base class for session token verification failures."""


class TokenExpiredError(TokenError):
    """The token's validity window has elapsed."""


class InvalidTokenError(TokenError):
    """The token's signature or structure is not acceptable."""


def _envelope(exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(exclude_none=True),
        headers=exc.headers,
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Convert an AppError into the ``{success: false, ...}`` envelope."""
    return _envelope(exc)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400s in the common envelope."""
    first = exc.errors()[0] if exc.errors() else {}
    message = first.get("msg")
    error = AppError(
        "Invalid request", status.HTTP_400_BAD_REQUEST, code="INVALID_INPUT", message=message
    )
    return _envelope(error)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Log store failures and answer with a 500 instead of crashing the request."""
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return _envelope(StoreUnavailableError(message=str(exc.__class__.__name__)))


def register_exception_handlers(app: FastAPI) -> None:
    """Register all custom exception handlers with the FastAPI app."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)

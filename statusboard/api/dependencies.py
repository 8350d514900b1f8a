"""FastAPI dependencies for authentication, settings and services."""

import logging
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Path, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from statusboard.config import Settings
from statusboard.database import MAX_ID, get_db
from statusboard.errors import (
    AuthUserNotFoundError,
    InvalidTokenAuthError,
    InvalidTokenError,
    NoTokenError,
    TokenExpiredAuthError,
    TokenExpiredError,
)
from statusboard.models.user import User
from statusboard.services.auth import TokenClaims, decode_access_token
from statusboard.services.statuses import StatusService
from statusboard.services.users import UserService

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

# Integer id taken from the URL path, within the range of the id columns
PathId = Annotated[int, Path(gt=0, le=MAX_ID)]


@dataclass(frozen=True)
class AuthContext:
    """An authenticated request: the live user row plus the token's claims."""

    user: User
    claims: TokenClaims


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was created with."""
    return request.app.state.settings


def get_auth_context(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> AuthContext:
    """Authenticate the request from its bearer token.

    The user is re-read from the database on every call, since tokens
    can't be revoked.
    """
    if credentials is None or not credentials.credentials:
        raise NoTokenError()

    try:
        claims = decode_access_token(credentials.credentials, settings)
    except TokenExpiredError:
        raise TokenExpiredAuthError() from None
    except InvalidTokenError as e:
        logger.warning(f"Token verification failed: {e}")
        raise InvalidTokenAuthError() from None

    user = db.query(User).filter(User.id == claims.user_id).first()
    if user is None:
        raise AuthUserNotFoundError(claims.user_id)

    return AuthContext(user=user, claims=claims)


def get_status_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> StatusService:
    """Get status service with dependencies."""
    return StatusService(db, settings.default_status_name)


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> UserService:
    """Get user service with dependencies."""
    return UserService(db, settings.default_status_name)

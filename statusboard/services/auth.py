"""Authentication service for JWT and password handling."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from statusboard.config import Settings, get_settings
from statusboard.database import MAX_ID
from statusboard.errors import InvalidTokenError, TokenExpiredError
from statusboard.models.user import User

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass(frozen=True)
class TokenClaims:
    """Identity asserted by a verified access token."""

    user_id: int
    username: str
    expires_at: datetime


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(
    user_id: int,
    username: str,
    expires_delta: timedelta | None = None,
    settings: Settings | None = None,
) -> str:
    """Create a signed JWT access token for a user."""
    settings = settings or get_settings()
    issued_at = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user_id),
        "username": username,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings | None = None) -> TokenClaims:
    """Decode and validate a JWT token.

    Raises TokenExpiredError once the token is past its expiry and
    InvalidTokenError for anything else that fails verification.
    """
    settings = settings or get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError as e:
        raise TokenExpiredError("Token expired") from e
    except JWTError as e:
        raise InvalidTokenError(str(e)) from e

    sub = payload.get("sub")
    username = payload.get("username")
    exp = payload.get("exp")
    if sub is None or username is None or exp is None:
        raise InvalidTokenError("Token is missing required claims")
    try:
        user_id = int(sub)
    except (TypeError, ValueError) as e:
        raise InvalidTokenError("Token subject is not a user id") from e
    if not 0 < user_id <= MAX_ID:
        raise InvalidTokenError("Token subject is not a user id")

    return TokenClaims(
        user_id=user_id,
        username=username,
        expires_at=datetime.fromtimestamp(exp, UTC),
    )


def authenticate_user(db: Session, username: str, password: str) -> User | None:
    """Authenticate a user by username and password."""
    user = get_user_by_username(db, username)
    if not user:
        logger.info(f"Login failed for unknown username '{username}'")
        return None
    if not verify_password(password, user.password):
        logger.info(f"Login failed for username '{username}': bad password")
        return None
    return user


def get_user_by_username(db: Session, username: str) -> User | None:
    """Get a user by username."""
    return db.query(User).filter(User.username == username).first()


def create_user(
    db: Session,
    username: str,
    password: str,
    full_name: str | None = None,
    email: str | None = None,
    status_id: int | None = None,
) -> User:
    """Create a new user. Used by seeding and tooling; there is no signup endpoint."""
    user = User(
        username=username,
        password=get_password_hash(password),
        full_name=full_name,
        email=email,
        current_status_id=status_id,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user

"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from statusboard.api.dependencies import get_app_settings
from statusboard.config import Settings
from statusboard.database import get_db
from statusboard.errors import InvalidCredentialsError, InvalidInputError
from statusboard.schemas.auth import LoginRequest, LoginResponse, LoginUser
from statusboard.services.auth import authenticate_user, create_access_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    """Login with username and password."""
    if not credentials.username or not credentials.password:
        raise InvalidInputError("Username and password are required")

    user = authenticate_user(db, credentials.username, credentials.password)
    if not user:
        raise InvalidCredentialsError()

    token = create_access_token(user.id, user.username, settings=settings)
    logger.info(f"User {user.username} (id={user.id}) logged in")

    status = user.current_status
    return LoginResponse(
        user=LoginUser(
            id=user.id,
            username=user.username,
            full_name=user.full_name,
            email=user.email,
            current_status=status.name if status is not None else settings.default_status_name,
            status_id=user.current_status_id,
        ),
        token=token,
    )

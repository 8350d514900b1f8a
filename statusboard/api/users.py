"""User roster and status API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from statusboard.api.dependencies import (
    AuthContext,
    PathId,
    get_auth_context,
    get_user_service,
)
from statusboard.schemas.user import (
    StatusUpdateRequest,
    StatusUpdateResponse,
    UserDetailResponse,
    UserListResponse,
)
from statusboard.services.users import UserService

router = APIRouter(prefix="/api/users", tags=["users"])

# Mounted only when ADMIN_ROUTES_ENABLED is set
admin_router = APIRouter(prefix="/api/users", tags=["admin"])


def _status_update_response(updated) -> StatusUpdateResponse:
    return StatusUpdateResponse(
        message=f'Status updated to "{updated.current_status}"',
        user=updated,
    )


@router.get("", response_model=UserListResponse)
def list_users(
    service: Annotated[UserService, Depends(get_user_service)],
    status: Annotated[str | None, Query(description="Exact status name to filter by")] = None,
):
    """Get all users and their current status. A blank filter means no filter."""
    users = service.list_users(status_name=status if status and status.strip() else None)
    return UserListResponse(users=users, total=len(users))


@router.get("/me", response_model=UserDetailResponse)
def get_me(
    auth: Annotated[AuthContext, Depends(get_auth_context)],
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Get the logged-in user's profile."""
    return UserDetailResponse(user=service.get_user(auth.user.id))


@router.put("/me/status", response_model=StatusUpdateResponse)
def update_my_status(
    body: StatusUpdateRequest,
    auth: Annotated[AuthContext, Depends(get_auth_context)],
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Change the logged-in user's status."""
    return _status_update_response(service.update_status(auth.user.id, body.status_id))


@router.get("/{user_id}", response_model=UserDetailResponse)
def get_user(
    user_id: PathId,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Get a single user's profile."""
    return UserDetailResponse(user=service.get_user(user_id))


@admin_router.put("/{user_id}/status", response_model=StatusUpdateResponse)
def update_user_status(
    user_id: PathId,
    body: StatusUpdateRequest,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Change any user's status. Not authenticated."""
    return _status_update_response(service.update_status(user_id, body.status_id))

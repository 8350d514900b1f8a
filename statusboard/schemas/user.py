"""User and roster schemas."""

from datetime import datetime
from typing import Any

from statusboard.schemas.common import ApiModel


class UserSummary(ApiModel):
    """A roster entry: user identity plus resolved status name."""

    id: int
    username: str
    full_name: str | None
    email: str | None
    current_status: str
    status_id: int | None
    created_at: datetime
    updated_at: datetime


class UserListResponse(ApiModel):
    """Roster response."""

    success: bool = True
    users: list[UserSummary]
    total: int


class UserDetailResponse(ApiModel):
    """Single user response."""

    success: bool = True
    user: UserSummary


class StatusUpdateRequest(ApiModel):
    """Request to change a user's status.

    ``statusId`` is validated by the service so malformed values map to the
    same error as a missing one.
    """

    status_id: Any = None


class UpdatedUser(ApiModel):
    """User fields returned after a status change."""

    id: int
    username: str
    full_name: str | None
    current_status: str
    status_id: int


class StatusUpdateResponse(ApiModel):
    """Status change response."""

    success: bool = True
    message: str
    user: UpdatedUser

"""Pydantic schemas for request/response validation."""

from statusboard.schemas.auth import LoginRequest, LoginResponse, LoginUser
from statusboard.schemas.common import ApiModel, ErrorResponse
from statusboard.schemas.status import (
    StatusDetailResponse,
    StatusListResponse,
    StatusResponse,
    StatusUserCountResponse,
)
from statusboard.schemas.user import (
    StatusUpdateRequest,
    StatusUpdateResponse,
    UpdatedUser,
    UserDetailResponse,
    UserListResponse,
    UserSummary,
)

__all__ = [
    "ApiModel",
    "ErrorResponse",
    "LoginRequest",
    "LoginResponse",
    "LoginUser",
    "StatusResponse",
    "StatusListResponse",
    "StatusDetailResponse",
    "StatusUserCountResponse",
    "UserSummary",
    "UserListResponse",
    "UserDetailResponse",
    "StatusUpdateRequest",
    "UpdatedUser",
    "StatusUpdateResponse",
]

"""Status schemas."""

from datetime import datetime

from statusboard.schemas.common import ApiModel


class StatusResponse(ApiModel):
    """Status response."""

    id: int
    name: str
    created_at: datetime


class StatusListResponse(ApiModel):
    """All statuses, ordered by id."""

    success: bool = True
    statuses: list[StatusResponse]
    total: int


class StatusDetailResponse(ApiModel):
    """A single status."""

    success: bool = True
    status: StatusResponse


class StatusUserCountResponse(ApiModel):
    """Number of users currently holding a status."""

    success: bool = True
    status_id: int
    count: int

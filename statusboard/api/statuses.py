"""Status directory API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from statusboard.api.dependencies import PathId, get_status_service
from statusboard.schemas.status import (
    StatusDetailResponse,
    StatusListResponse,
    StatusResponse,
    StatusUserCountResponse,
)
from statusboard.services.statuses import StatusService

router = APIRouter(prefix="/api/statuses", tags=["statuses"])


@router.get("", response_model=StatusListResponse)
def list_statuses(service: Annotated[StatusService, Depends(get_status_service)]):
    """Get all available statuses."""
    statuses = [StatusResponse.model_validate(s) for s in service.list_statuses()]
    return StatusListResponse(statuses=statuses, total=len(statuses))


@router.get("/{status_id}", response_model=StatusDetailResponse)
def get_status(
    status_id: PathId,
    service: Annotated[StatusService, Depends(get_status_service)],
):
    """Get a single status."""
    return StatusDetailResponse(status=StatusResponse.model_validate(service.get_status(status_id)))


@router.get("/{status_id}/users/count", response_model=StatusUserCountResponse)
def count_status_users(
    status_id: PathId,
    service: Annotated[StatusService, Depends(get_status_service)],
):
    """Count how many users currently hold a status."""
    return StatusUserCountResponse(status_id=status_id, count=service.count_users(status_id))

"""SQLAlchemy models."""

from statusboard.models.status import Status
from statusboard.models.user import User

__all__ = [
    "Status",
    "User",
]

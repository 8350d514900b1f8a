"""User roster and status mutation service."""

import logging
from typing import Any

from sqlalchemy import func, or_, update
from sqlalchemy.orm import Session, contains_eager

from statusboard.database import MAX_ID
from statusboard.errors import InvalidInputError, InvalidStatusError, UserNotFoundError
from statusboard.models.status import Status
from statusboard.models.user import User
from statusboard.schemas.user import UpdatedUser, UserSummary
from statusboard.services.statuses import StatusService

logger = logging.getLogger(__name__)


def to_user_summary(user: User, default_status_name: str) -> UserSummary:
    """Build the canonical roster entry for a user.

    The status reference is resolved to its display name here, falling back
    to the default label when the user has none.
    """
    status = user.current_status
    return UserSummary(
        id=user.id,
        username=user.username,
        full_name=user.full_name,
        email=user.email,
        current_status=status.name if status is not None else default_status_name,
        status_id=status.id if status is not None else None,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def parse_status_id(value: Any) -> int:
    """Coerce a request's statusId into a positive integer.

    Accepts ints and digit strings; rejects booleans, floats with a
    fractional part, zero, negatives and anything past MAX_ID.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidInputError("Status ID is required")
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidInputError("Status ID is required")
        value = int(value)
    if isinstance(value, str):
        value = value.strip()
        if not (value.isascii() and value.isdigit()):
            raise InvalidInputError("Status ID is required")
        value = int(value)
    if not isinstance(value, int) or not 0 < value <= MAX_ID:
        raise InvalidInputError("Status ID is required")
    return value


class UserService:
    """Service for roster reads and the status write path."""

    def __init__(self, db: Session, default_status_name: str = "Working"):
        self.db = db
        self.default_status_name = default_status_name
        self.statuses = StatusService(db, default_status_name)

    def list_users(self, status_name: str | None = None) -> list[UserSummary]:
        """List all users with their resolved status, optionally filtered.

        The filter is an exact match on the resolved status name. Filtering
        by the default status also returns users that have no status set.
        """
        query = (
            self.db.query(User)
            .outerjoin(Status, User.current_status_id == Status.id)
            .options(contains_eager(User.current_status))
        )
        if status_name is not None:
            condition = Status.name == status_name
            if status_name == self.default_status_name:
                condition = or_(condition, User.current_status_id.is_(None))
            query = query.filter(condition)

        users = query.order_by(User.id.asc()).all()
        return [to_user_summary(user, self.default_status_name) for user in users]

    def get_user(self, user_id: int) -> UserSummary:
        """Get a single roster entry or raise UserNotFoundError."""
        user = self.db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise UserNotFoundError(user_id)
        return to_user_summary(user, self.default_status_name)

    def update_status(self, user_id: int, status_id: Any) -> UpdatedUser:
        """Set a user's current status.

        The status is validated before anything is written. The status change
        and the updated_at refresh happen in one UPDATE statement.
        """
        status_id = parse_status_id(status_id)

        status = self.statuses.find_status(status_id)
        if status is None:
            raise InvalidStatusError(status_id)

        result = self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(current_status_id=status.id, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            self.db.rollback()
            raise UserNotFoundError(user_id)
        self.db.commit()

        user = self.db.query(User).filter(User.id == user_id).one()
        logger.info(f"User {user.username} (id={user.id}) status set to '{status.name}'")
        return UpdatedUser(
            id=user.id,
            username=user.username,
            full_name=user.full_name,
            current_status=status.name,
            status_id=status.id,
        )

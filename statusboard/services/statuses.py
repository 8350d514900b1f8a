"""Status directory service."""

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from statusboard.errors import NotFoundError
from statusboard.models.status import Status
from statusboard.models.user import User


class StatusService:
    """Read-only access to the set of valid statuses."""

    def __init__(self, db: Session, default_status_name: str = "Working"):
        self.db = db
        self.default_status_name = default_status_name

    def list_statuses(self) -> list[Status]:
        """Return every status, ordered by id ascending."""
        return self.db.query(Status).order_by(Status.id.asc()).all()

    def find_status(self, status_id: int) -> Status | None:
        """Look up a status by id without raising."""
        return self.db.query(Status).filter(Status.id == status_id).first()

    def get_status(self, status_id: int) -> Status:
        """Get a status by id or raise NotFoundError."""
        status = self.find_status(status_id)
        if status is None:
            raise NotFoundError("Status not found")
        return status

    def count_users(self, status_id: int) -> int:
        """Count users whose resolved status is ``status_id``.

        Users without a status resolve to the default status, so they are
        counted against it.
        """
        status = self.get_status(status_id)
        condition = User.current_status_id == status.id
        if status.name == self.default_status_name:
            condition = or_(condition, User.current_status_id.is_(None))
        return self.db.query(func.count(User.id)).filter(condition).scalar()

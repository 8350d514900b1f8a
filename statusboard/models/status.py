"""Status model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from statusboard.database import Base
from statusboard.models.mixins import CreatedAtMixin


class Status(Base, CreatedAtMixin):
    """Availability label a user can hold (reference data)."""

    __tablename__ = "statuses"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)

    # Relationships
    users = relationship("User", back_populates="current_status")

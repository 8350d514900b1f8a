"""User model."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from statusboard.database import Base
from statusboard.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """Team member who logs in and publishes an availability status."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)  # bcrypt hash
    full_name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    current_status_id = Column(Integer, ForeignKey("statuses.id"), nullable=True, index=True)

    # Relationships
    current_status = relationship("Status", back_populates="users")

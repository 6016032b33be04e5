"""Teacher request model definitions."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Integer, String
from educonnect.database import Base

REQUEST_PENDING = "pending"
REQUEST_APPROVED = "approved"
REQUEST_REJECTED = "rejected"


class TeacherRequest(Base):
    """Represents an application to teach on the platform."""
    __tablename__ = "teacher_requests"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, index=True, nullable=False)
    data = Column(JSON, nullable=False, default=dict)
    status = Column(String, nullable=False, default=REQUEST_PENDING)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

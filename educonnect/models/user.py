"""User model definitions."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String
from educonnect.database import Base

ROLE_STUDENT = "Student"
ROLE_TEACHER = "teacher"
ROLE_ADMIN = "admin"


class User(Base):
    """Represents a registered platform user."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String)
    photo = Column(String)
    role = Column(String, nullable=False, default=ROLE_STUDENT)  # Student/teacher/admin
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

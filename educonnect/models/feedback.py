"""Feedback model definitions."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Integer
from educonnect.database import Base


class Feedback(Base):
    """Represents free-form feedback left by a visitor."""
    __tablename__ = "feedback"

    id = Column(Integer, primary_key=True, index=True)
    content = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

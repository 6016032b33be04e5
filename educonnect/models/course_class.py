"""Class (course) model definitions."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Float, Integer, String, Text
from educonnect.database import Base

STATUS_PENDING = "Pending"
STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"


class CourseClass(Base):
    """Represents a class offered by a publisher."""
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    price = Column(Float, nullable=False, default=0.0)
    description = Column(Text)
    image = Column(String)
    publisher_email = Column(String, index=True)
    publisher_name = Column(String)
    status = Column(String, nullable=False, default=STATUS_PENDING)
    enroll = Column(Integer, default=0)  # older rows may lack a counter
    assignments = Column(JSON)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

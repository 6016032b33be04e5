"""Payment model definitions."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Float, Integer, String
from educonnect.database import Base


class Payment(Base):
    """Represents a confirmed client-side payment. Rows are never updated."""
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, index=True, nullable=False)
    amount = Column(Float, nullable=False)
    class_id = Column(Integer, index=True)  # no foreign key, classes may be deleted
    transaction_id = Column(String)
    details = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text, Numeric
from app.db.base import Base


class Rate(Base):
    """Admin-managed price per square metre, one row per rate type ('CHINE', 'STAR')."""
    __tablename__ = "rates"

    id = Column(Integer, primary_key=True, index=True)
    rate_type = Column(String(20), nullable=False, unique=True, index=True)
    rate_per_sq_meter = Column(Numeric(12, 2), nullable=False)
    description = Column(Text, nullable=True)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

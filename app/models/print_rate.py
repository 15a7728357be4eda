from datetime import datetime, timezone
from sqlalchemy import Column, Integer, ForeignKey, DateTime, Date, Numeric
from app.db.base import Base


class PrintRate(Base):
    """
    Dated history of the shop's print rate.

    The rate in force on a given day is the entry with the latest
    effective_date that is not after that day.
    """
    __tablename__ = "print_rates"

    id = Column(Integer, primary_key=True, index=True)
    rate_per_sqm = Column(Numeric(12, 2), nullable=False)
    effective_date = Column(Date, nullable=False, index=True)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

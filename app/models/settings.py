from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, Text, Numeric
from app.db.base import Base


class Settings(Base):
    """Singleton row with company display fields and billing defaults."""
    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, index=True)
    default_rate_per_sq_ft = Column(Numeric(12, 2), nullable=False, default=100)
    company_name = Column(String(100), nullable=False, default="My Billing Company")
    company_address = Column(Text, nullable=True, default="")
    company_phone = Column(String(30), nullable=True, default="")
    tax_rate = Column(Numeric(5, 2), nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

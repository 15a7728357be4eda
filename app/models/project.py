from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text, Numeric
from sqlalchemy.orm import relationship
from app.db.base import Base


class Project(Base):
    """
    A unit of billable print work.

    `area` (length x width) and `total_amount` (area x rate) are derived once
    when the project is created and never recomputed afterwards.
    """
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)

    length = Column(Numeric(12, 2), nullable=False)
    width = Column(Numeric(12, 2), nullable=False)
    area = Column(Numeric(12, 2), nullable=False)
    rate_per_sq_ft = Column(Numeric(12, 2), nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)

    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    assigned_to = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # Relationships
    client = relationship("Client", back_populates="projects")
    bills = relationship("Bill", back_populates="project", order_by="Bill.created_at.desc()")

    def __repr__(self):
        return f"<Project(id={self.id}, name='{self.name}', area={self.area}, total={self.total_amount})>"

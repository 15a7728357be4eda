from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text
from sqlalchemy.orm import relationship
from app.db.base import Base


class Client(Base):
    """
    A customer of the print shop.

    Owns projects and bills. `assigned_to` is the user account that manages
    the record; non-admin users only ever see their own assignments.
    """
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    phone = Column(String(30), nullable=True)
    address = Column(Text, nullable=True)
    assigned_to = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # Relationships
    projects = relationship("Project", back_populates="client", order_by="Project.created_at.desc()")
    bills = relationship("Bill", back_populates="client", order_by="Bill.created_at.desc()")
    assignee = relationship("User", foreign_keys=[assigned_to])

    def __repr__(self):
        return f"<Client(id={self.id}, name='{self.name}')>"

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text, Numeric
from sqlalchemy.orm import relationship
from app.db.base import Base


class Bill(Base):
    """
    An invoice owed by a client, optionally tied to a project.

    Attributes:
        total_amount: Amount invoiced
        paid_amount: Sum applied by payments (or set by an admin override)
        outstanding_amount: Always total_amount - paid_amount after a payment
        status: 'PENDING', 'PARTIAL', 'PAID' or 'OVERDUE'
    """
    __tablename__ = "bills"

    id = Column(Integer, primary_key=True, index=True)
    bill_number = Column(String(50), nullable=False, unique=True, index=True)

    total_amount = Column(Numeric(12, 2), nullable=False)
    paid_amount = Column(Numeric(12, 2), nullable=False, default=0)
    outstanding_amount = Column(Numeric(12, 2), nullable=False)
    status = Column(String(20), nullable=False, default="PENDING", index=True)

    due_date = Column(DateTime(timezone=True), nullable=True)
    paid_date = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)

    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="SET NULL"), nullable=True, index=True)
    assigned_to = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # Relationships
    client = relationship("Client", back_populates="bills")
    project = relationship("Project", back_populates="bills")
    payments = relationship("Payment", back_populates="bill", order_by="Payment.payment_date.desc()")

    def __repr__(self):
        return (
            f"<Bill(id={self.id}, number='{self.bill_number}', total={self.total_amount}, "
            f"paid={self.paid_amount}, status='{self.status}')>"
        )

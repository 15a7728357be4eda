"""
Pydantic schemas for Payments and the bill settlement endpoints.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, field_validator

from app.core.constants import BillStatus, PaymentMethod


class PaymentCreate(BaseModel):
    """
    Schema for recording a payment against a bill.

    Negative amounts (refunds) and amounts above the outstanding balance are
    accepted; zero is rejected.
    """
    bill_id: int
    amount: Decimal
    method: PaymentMethod = PaymentMethod.CASH
    notes: Optional[str] = None
    payment_date: Optional[datetime] = None

    @field_validator("amount")
    @classmethod
    def amount_not_zero(cls, value: Decimal) -> Decimal:
        if value == 0:
            raise ValueError("amount must not be zero")
        return value


class BillOverride(BaseModel):
    """Admin-only direct overwrite of a bill's status and/or paid amount"""
    bill_id: int
    status: Optional[BillStatus] = None
    paid_amount: Optional[Decimal] = None


class PaymentOut(BaseModel):
    """Schema for payment output"""
    id: int
    bill_id: int
    amount: Decimal
    payment_date: datetime
    method: PaymentMethod
    notes: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True

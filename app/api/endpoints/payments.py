"""
Payments API Endpoints

POST records a payment and settles the bill in one transaction.
PUT is the admin-only override of a bill's status / paid amount.
"""

from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_db, require_permission
from app.core.permissions import Resource, Action
from app.models.user import User
from app.schemas.bill import BillDetail, PaymentDetail, PaymentRecorded
from app.schemas.payment import BillOverride, PaymentCreate
from app.services import billing, records

router = APIRouter()


@router.get("/", response_model=List[PaymentDetail])
async def list_payments(
    current_user: User = Depends(require_permission(Resource.PAYMENT, Action.READ)),
    db: AsyncSession = Depends(get_db)
):
    """All visible payments, most recent payment date first."""
    return await records.list_payments(db, current_user)


@router.post("/", response_model=PaymentRecorded, status_code=status.HTTP_201_CREATED)
async def record_payment(
    payment_data: PaymentCreate,
    current_user: User = Depends(require_permission(Resource.PAYMENT, Action.CREATE)),
    db: AsyncSession = Depends(get_db)
):
    payment, bill = await billing.record_payment(
        db,
        current_user,
        bill_id=payment_data.bill_id,
        amount=payment_data.amount,
        method=payment_data.method,
        notes=payment_data.notes,
        payment_date=payment_data.payment_date,
    )
    return {"payment": payment, "bill": bill}


@router.put("/", response_model=BillDetail)
async def override_bill(
    override: BillOverride,
    current_user: User = Depends(require_permission(Resource.BILL, Action.MANAGE)),
    db: AsyncSession = Depends(get_db)
):
    """
    Overwrite a bill's status and/or paid amount (admin only).

    Supplying paid_amount recomputes outstanding_amount and re-derives the
    status; OVERDUE can only be set here.
    """
    return await billing.override_bill(
        db,
        override.bill_id,
        status=override.status,
        paid_amount=override.paid_amount,
    )

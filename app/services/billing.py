"""
Bill settlement.

Applying a payment recomputes the bill's paid and outstanding amounts and
derives its status. The payment insert and the bill update are committed
as one transaction: if either fails, neither is visible afterwards.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.constants import BillStatus, PaymentMethod
from app.core.errors import NotFound, ValidationFailed
from app.core.permissions import UserRole, sees_all_records
from app.logging import get_logger
from app.models.bill import Bill
from app.models.payment import Payment
from app.models.user import User
from app.services import records

logger = get_logger(__name__)


def derive_status(paid: Decimal, total: Decimal) -> BillStatus:
    """
    Status as a pure function of paid vs total.

    paid >= total -> PAID, 0 < paid < total -> PARTIAL, otherwise PENDING.
    OVERDUE is never derived.
    """
    if paid >= total:
        return BillStatus.PAID
    if paid > 0:
        return BillStatus.PARTIAL
    return BillStatus.PENDING


def apply_payment(bill: Bill, amount: Decimal, now: Optional[datetime] = None) -> Bill:
    """
    Apply `amount` to the bill in place.

    PAID when nothing remains outstanding (paid_date is stamped), PARTIAL
    when something has been paid, otherwise the current status is kept.
    """
    now = now or datetime.now(timezone.utc)
    new_paid = Decimal(bill.paid_amount or 0) + Decimal(amount)
    new_outstanding = Decimal(bill.total_amount) - new_paid

    if new_outstanding <= 0:
        new_status = BillStatus.PAID
    elif new_paid > 0:
        new_status = BillStatus.PARTIAL
    else:
        new_status = BillStatus(bill.status)

    bill.paid_amount = new_paid
    bill.outstanding_amount = new_outstanding
    bill.status = new_status.value
    if new_status == BillStatus.PAID:
        bill.paid_date = now
    return bill


def lock_bill_query(bill_id: int, user: Optional[User] = None):
    """SELECT ... FOR UPDATE on one bill, restricted to the caller's assignments for non-admins."""
    query = select(Bill).filter(Bill.id == bill_id)
    if user is not None and not sees_all_records(UserRole(user.role)):
        query = query.filter(Bill.assigned_to == user.id)
    return query.with_for_update()


async def _lock_bill(db: AsyncSession, bill_id: int, user: Optional[User] = None) -> Bill:
    result = await db.execute(
        lock_bill_query(bill_id, user).execution_options(populate_existing=True)
    )
    bill = result.scalar_one_or_none()
    if not bill:
        raise NotFound("Bill not found")
    return bill


async def record_payment(
    db: AsyncSession,
    user: User,
    bill_id: int,
    amount: Decimal,
    method: PaymentMethod = PaymentMethod.CASH,
    notes: Optional[str] = None,
    payment_date: Optional[datetime] = None,
) -> Tuple[Payment, Bill]:
    """
    Record a payment against a bill and settle the bill.

    Returns the new payment and the updated bill (with payments, client and
    project loaded).

    Raises:
        NotFound: the bill does not exist or is not visible to the user
    """
    bill = await _lock_bill(db, bill_id, user)
    now = datetime.now(timezone.utc)

    payment = Payment(
        bill_id=bill.id,
        amount=Decimal(amount),
        method=PaymentMethod(method).value,
        notes=notes or None,
        payment_date=payment_date or now,
    )
    try:
        db.add(payment)
        await db.flush()
        apply_payment(bill, Decimal(amount), now)
        await db.commit()
    except Exception:
        await db.rollback()
        logger.error("Failed to record payment", bill_id=bill_id, amount=amount)
        raise

    logger.audit(
        "Payment recorded",
        bill_id=bill.id,
        payment_id=payment.id,
        amount=payment.amount,
        status=bill.status,
        user_id=user.id,
    )
    return payment, await records.get_bill(db, None, bill.id)


async def override_bill(
    db: AsyncSession,
    bill_id: int,
    status: Optional[BillStatus] = None,
    paid_amount: Optional[Decimal] = None,
) -> Bill:
    """
    Overwrite a bill's status and/or paid amount without a payment record.

    A supplied paid_amount always wins over a supplied status: the status is
    re-derived from the new amounts.
    """
    if status is None and paid_amount is None:
        raise ValidationFailed("Provide a status or a paid_amount")

    bill = await _lock_bill(db, bill_id)
    now = datetime.now(timezone.utc)

    if status is not None:
        bill.status = BillStatus(status).value
        if bill.status == BillStatus.PAID:
            bill.paid_date = now

    if paid_amount is not None:
        paid = Decimal(paid_amount)
        total = Decimal(bill.total_amount)
        bill.paid_amount = paid
        bill.outstanding_amount = total - paid
        derived = derive_status(paid, total)
        bill.status = derived.value
        if derived == BillStatus.PAID:
            bill.paid_date = now

    await db.commit()
    logger.audit(
        "Bill overridden",
        bill_id=bill.id,
        status=bill.status,
        paid=bill.paid_amount,
        outstanding=bill.outstanding_amount,
    )
    return await records.get_bill(db, None, bill.id)

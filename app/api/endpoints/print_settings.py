"""
Print rate history

The shop's print rate changes over time; every change is a new dated row.
"""

from datetime import date
from decimal import Decimal
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.api.dependencies import get_db, require_permission
from app.core.config import settings
from app.core.permissions import Resource, Action
from app.logging import get_logger
from app.models.print_rate import PrintRate
from app.models.user import User
from app.schemas.rate import CurrentPrintRate, PrintRateCreate, PrintRateOut

router = APIRouter()
logger = get_logger(__name__)


@router.get("/", response_model=List[PrintRateOut])
async def list_print_rates(
    current_user: User = Depends(require_permission(Resource.PRINT_RATE, Action.READ)),
    db: AsyncSession = Depends(get_db)
):
    result = await db.execute(
        select(PrintRate).order_by(PrintRate.effective_date.desc(), PrintRate.id.desc())
    )
    return result.scalars().all()


@router.post("/", response_model=PrintRateOut, status_code=status.HTTP_201_CREATED)
async def add_print_rate(
    rate_data: PrintRateCreate,
    current_user: User = Depends(require_permission(Resource.PRINT_RATE, Action.CREATE)),
    db: AsyncSession = Depends(get_db)
):
    print_rate = PrintRate(
        rate_per_sqm=rate_data.rate,
        effective_date=rate_data.effective_date or date.today(),
        created_by=current_user.id,
    )
    db.add(print_rate)
    await db.commit()
    await db.refresh(print_rate)

    logger.audit("Print rate set", rate=print_rate.rate_per_sqm, effective_date=print_rate.effective_date)
    return print_rate


@router.get("/rate", response_model=CurrentPrintRate)
async def get_todays_rate(
    current_user: User = Depends(require_permission(Resource.PRINT_RATE, Action.READ)),
    db: AsyncSession = Depends(get_db)
):
    """
    Rate in force today: the latest entry whose effective date is not in
    the future, or the configured default when there is none.
    """
    result = await db.execute(
        select(PrintRate)
        .filter(PrintRate.effective_date <= date.today())
        .order_by(PrintRate.effective_date.desc(), PrintRate.id.desc())
        .limit(1)
    )
    current = result.scalar_one_or_none()
    if not current:
        return CurrentPrintRate(rate=Decimal(str(settings.DEFAULT_PRINT_RATE)))
    return CurrentPrintRate(rate=current.rate_per_sqm, effective_date=current.effective_date)

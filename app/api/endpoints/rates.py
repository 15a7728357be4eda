"""
Rates API Endpoints

One admin-managed price per square metre for each rate type. This is the
only resource the API allows deleting.
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.api.dependencies import get_db, require_permission
from app.core.permissions import Resource, Action
from app.logging import get_logger
from app.models.rate import Rate
from app.models.user import User
from app.schemas.rate import RateCreate, RateOut, RateUpdate

router = APIRouter()
logger = get_logger(__name__)


@router.get("/", response_model=List[RateOut])
async def list_rates(
    current_user: User = Depends(require_permission(Resource.RATE, Action.READ)),
    db: AsyncSession = Depends(get_db)
):
    result = await db.execute(select(Rate).order_by(Rate.rate_type.asc()))
    return result.scalars().all()


@router.post("/", response_model=RateOut, status_code=status.HTTP_201_CREATED)
async def create_rate(
    rate_data: RateCreate,
    current_user: User = Depends(require_permission(Resource.RATE, Action.CREATE)),
    db: AsyncSession = Depends(get_db)
):
    """Create the rate for a type. Each type exists at most once (409 otherwise)."""
    result = await db.execute(select(Rate).filter(Rate.rate_type == rate_data.rate_type.value))
    if result.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Rate for {rate_data.rate_type.value} already exists. Use update instead."
        )

    rate = Rate(
        rate_type=rate_data.rate_type.value,
        rate_per_sq_meter=rate_data.rate_per_sq_meter,
        description=rate_data.description or None,
        created_by=current_user.id,
    )
    db.add(rate)
    await db.commit()
    await db.refresh(rate)

    logger.audit("Rate created", rate_type=rate.rate_type, rate=rate.rate_per_sq_meter)
    return rate


@router.put("/{rate_id}", response_model=RateOut)
async def update_rate(
    rate_id: int,
    rate_update: RateUpdate,
    current_user: User = Depends(require_permission(Resource.RATE, Action.UPDATE)),
    db: AsyncSession = Depends(get_db)
):
    rate = await db.get(Rate, rate_id)
    if not rate:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rate not found")

    rate.rate_per_sq_meter = rate_update.rate_per_sq_meter
    rate.description = rate_update.description or None
    await db.commit()
    await db.refresh(rate)

    logger.audit("Rate updated", rate_type=rate.rate_type, rate=rate.rate_per_sq_meter)
    return rate


@router.delete("/{rate_id}")
async def delete_rate(
    rate_id: int,
    current_user: User = Depends(require_permission(Resource.RATE, Action.DELETE)),
    db: AsyncSession = Depends(get_db)
):
    rate = await db.get(Rate, rate_id)
    if not rate:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rate not found")

    await db.delete(rate)
    await db.commit()

    logger.audit("Rate deleted", rate_id=rate_id, user_id=current_user.id)
    return {"success": True}

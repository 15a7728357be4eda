"""
Bills API Endpoints
"""

from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_db, require_permission
from app.core.permissions import Resource, Action
from app.models.user import User
from app.schemas.bill import BillCreate, BillDetail
from app.services import records

router = APIRouter()


@router.get("/", response_model=List[BillDetail])
async def list_bills(
    current_user: User = Depends(require_permission(Resource.BILL, Action.READ)),
    db: AsyncSession = Depends(get_db)
):
    """List bills, newest first, with client, project and payments."""
    return await records.list_bills(db, current_user)


@router.post("/", response_model=BillDetail, status_code=status.HTTP_201_CREATED)
async def create_bill(
    bill_data: BillCreate,
    current_user: User = Depends(require_permission(Resource.BILL, Action.CREATE)),
    db: AsyncSession = Depends(get_db)
):
    """
    Create a PENDING bill.

    Fails with 409 if the bill number is already used.
    """
    return await records.create_bill(db, current_user, bill_data)


@router.get("/{bill_id}", response_model=BillDetail)
async def get_bill(
    bill_id: int,
    current_user: User = Depends(require_permission(Resource.BILL, Action.READ)),
    db: AsyncSession = Depends(get_db)
):
    return await records.get_bill(db, current_user, bill_id)

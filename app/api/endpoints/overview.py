from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_db, require_permission
from app.core.permissions import Resource, Action
from app.models.user import User
from app.schemas.overview import OverviewOut
from app.services.overview import client_overview

router = APIRouter()


@router.get("/", response_model=OverviewOut)
async def get_client_overview(
    current_user: User = Depends(require_permission(Resource.OVERVIEW, Action.READ)),
    db: AsyncSession = Depends(get_db)
):
    """Every client with projects, bills and totals (admin only)."""
    return await client_overview(db)

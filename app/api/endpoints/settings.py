"""
Company settings (singleton row)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.api.dependencies import get_db, require_permission
from app.core.permissions import Resource, Action
from app.logging import get_logger
from app.models.settings import Settings
from app.models.user import User
from app.schemas.rate import SettingsOut, SettingsUpdate

router = APIRouter()
logger = get_logger(__name__)


async def get_or_create_settings(db: AsyncSession) -> Settings:
    """Return the settings row, creating it with defaults on first access."""
    result = await db.execute(select(Settings).order_by(Settings.id.asc()).limit(1))
    current = result.scalar_one_or_none()
    if current:
        return current

    current = Settings(
        default_rate_per_sq_ft=100,
        company_name="My Billing Company",
        company_address="",
        company_phone="",
        tax_rate=0,
    )
    db.add(current)
    await db.commit()
    await db.refresh(current)
    logger.info("Default settings created")
    return current


@router.get("/", response_model=SettingsOut)
async def read_settings(
    current_user: User = Depends(require_permission(Resource.SETTINGS, Action.READ)),
    db: AsyncSession = Depends(get_db)
):
    return await get_or_create_settings(db)


@router.put("/", response_model=SettingsOut)
async def update_settings(
    settings_update: SettingsUpdate,
    current_user: User = Depends(require_permission(Resource.SETTINGS, Action.UPDATE)),
    db: AsyncSession = Depends(get_db)
):
    current = await get_or_create_settings(db)

    update_data = settings_update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(current, field, value)

    await db.commit()
    await db.refresh(current)

    logger.audit("Settings updated", fields=",".join(sorted(update_data)), user_id=current_user.id)
    return current

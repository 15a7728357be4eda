"""
Users API Endpoints (admin only)
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.api.dependencies import get_db, require_permission
from app.core.permissions import Resource, Action
from app.core.security import get_password_hash
from app.logging import get_logger
from app.models.client import Client
from app.models.user import User
from app.schemas.user import UserCreate, UserOut

router = APIRouter()
logger = get_logger(__name__)


@router.get("/", response_model=List[UserOut])
async def list_users(
    current_user: User = Depends(require_permission(Resource.USER, Action.READ)),
    db: AsyncSession = Depends(get_db)
):
    result = await db.execute(select(User).order_by(User.created_at.desc(), User.id.desc()))
    return result.scalars().all()


@router.post("/", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    current_user: User = Depends(require_permission(Resource.USER, Action.CREATE)),
    db: AsyncSession = Depends(get_db)
):
    email = user_data.email.lower()
    result = await db.execute(select(User).filter(User.email == email))
    if result.scalar_one_or_none():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User with this email already exists")

    if user_data.client_id is not None and not await db.get(Client, user_data.client_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")

    new_user = User(
        name=user_data.name,
        email=email,
        password=get_password_hash(user_data.password),
        role=user_data.role.value,
        client_id=user_data.client_id,
    )
    db.add(new_user)
    await db.commit()
    await db.refresh(new_user)

    logger.audit("User created", user_id=new_user.id, role=new_user.role, created_by=current_user.id)
    return new_user

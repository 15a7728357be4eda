"""
Clients API Endpoints

Non-admin users only see and create clients assigned to themselves.
"""

from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_db, require_permission
from app.core.permissions import Resource, Action
from app.models.user import User
from app.schemas.bill import ClientDetail
from app.schemas.client import ClientCreate
from app.services import records

router = APIRouter()


@router.get("/", response_model=List[ClientDetail])
async def list_clients(
    current_user: User = Depends(require_permission(Resource.CLIENT, Action.READ)),
    db: AsyncSession = Depends(get_db)
):
    """List clients ordered by name, with projects, bills and payments."""
    return await records.list_clients(db, current_user)


@router.post("/", response_model=ClientDetail, status_code=status.HTTP_201_CREATED)
async def create_client(
    client_data: ClientCreate,
    current_user: User = Depends(require_permission(Resource.CLIENT, Action.CREATE)),
    db: AsyncSession = Depends(get_db)
):
    return await records.create_client(db, current_user, client_data)


@router.get("/{client_id}", response_model=ClientDetail)
async def get_client(
    client_id: int,
    current_user: User = Depends(require_permission(Resource.CLIENT, Action.READ)),
    db: AsyncSession = Depends(get_db)
):
    return await records.get_client(db, current_user, client_id)

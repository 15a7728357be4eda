"""
Projects API Endpoints
"""

from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_db, require_permission
from app.core.permissions import Resource, Action
from app.models.user import User
from app.schemas.bill import ProjectDetail
from app.schemas.project import ProjectCreate
from app.services import records

router = APIRouter()


@router.get("/", response_model=List[ProjectDetail])
async def list_projects(
    current_user: User = Depends(require_permission(Resource.PROJECT, Action.READ)),
    db: AsyncSession = Depends(get_db)
):
    return await records.list_projects(db, current_user)


@router.post("/", response_model=ProjectDetail, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_data: ProjectCreate,
    current_user: User = Depends(require_permission(Resource.PROJECT, Action.CREATE)),
    db: AsyncSession = Depends(get_db)
):
    """
    Create a project for an existing client.

    area and total_amount are derived from length, width and rate.
    """
    return await records.create_project(db, current_user, project_data)


@router.get("/{project_id}", response_model=ProjectDetail)
async def get_project(
    project_id: int,
    current_user: User = Depends(require_permission(Resource.PROJECT, Action.READ)),
    db: AsyncSession = Depends(get_db)
):
    return await records.get_project(db, current_user, project_id)

"""
Pydantic schemas for Projects.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field


class ProjectCreate(BaseModel):
    """
    Schema for creating a project.

    area and total_amount are always computed by the server.
    """
    name: str = Field(..., min_length=1, max_length=100)
    length: Decimal = Field(..., gt=0)
    width: Decimal = Field(..., gt=0)
    rate_per_sq_ft: Decimal = Field(..., gt=0)
    client_id: int
    description: Optional[str] = None
    assigned_to: Optional[int] = None


class ProjectOut(BaseModel):
    """Schema for project output"""
    id: int
    name: str
    description: Optional[str] = None
    length: Decimal
    width: Decimal
    area: Decimal
    rate_per_sq_ft: Decimal
    total_amount: Decimal
    client_id: int
    assigned_to: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True

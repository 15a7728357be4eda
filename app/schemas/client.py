"""
Pydantic schemas for Client records.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class ClientBase(BaseModel):
    """Base schema for client with common fields"""
    name: str = Field(..., min_length=1, max_length=100)
    phone: Optional[str] = Field(None, max_length=30)
    address: Optional[str] = None


class ClientCreate(ClientBase):
    """Schema for creating a client. Only admins may set assigned_to."""
    assigned_to: Optional[int] = None


class ClientOut(ClientBase):
    """Schema for client output"""
    id: int
    assigned_to: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True

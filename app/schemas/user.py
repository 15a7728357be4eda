"""
Pydantic schemas for accounts and authentication.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from app.core.permissions import UserRole


class Login(BaseModel):
    email: EmailStr
    password: str


class Signup(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    name: str = Field(..., min_length=1, max_length=100)


class UserCreate(Signup):
    """Admin-created account with an explicit role"""
    role: UserRole = UserRole.CLIENT
    client_id: Optional[int] = None


class UserOut(BaseModel):
    """Account output. Never includes the password hash."""
    id: int
    name: Optional[str] = None
    email: str
    role: UserRole
    client_id: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True


class SessionOut(BaseModel):
    success: bool = True
    user: UserOut

"""
Pydantic schemas for rates, the print rate history and company settings.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field

from app.core.constants import RateType


class RateCreate(BaseModel):
    rate_type: RateType
    rate_per_sq_meter: Decimal = Field(..., gt=0)
    description: Optional[str] = None


class RateUpdate(BaseModel):
    rate_per_sq_meter: Decimal = Field(..., gt=0)
    description: Optional[str] = None


class RateOut(BaseModel):
    id: int
    rate_type: RateType
    rate_per_sq_meter: Decimal
    description: Optional[str] = None
    created_by: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PrintRateCreate(BaseModel):
    """New print rate entry. effective_date defaults to today."""
    rate: Decimal = Field(..., gt=0)
    effective_date: Optional[date] = None


class PrintRateOut(BaseModel):
    id: int
    rate_per_sqm: Decimal
    effective_date: date
    created_by: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True


class CurrentPrintRate(BaseModel):
    rate: Decimal
    effective_date: Optional[date] = None


class SettingsUpdate(BaseModel):
    """Partial update of the company settings"""
    default_rate_per_sq_ft: Optional[Decimal] = Field(None, gt=0)
    company_name: Optional[str] = Field(None, min_length=1, max_length=100)
    company_address: Optional[str] = None
    company_phone: Optional[str] = Field(None, max_length=30)
    tax_rate: Optional[Decimal] = Field(None, ge=0, le=100)


class SettingsOut(BaseModel):
    id: int
    default_rate_per_sq_ft: Decimal
    company_name: str
    company_address: Optional[str] = None
    company_phone: Optional[str] = None
    tax_rate: Decimal
    updated_at: datetime

    class Config:
        from_attributes = True

"""
Pydantic schemas for Bills and the nested read models returned by the API.

Reads always return related records eagerly, so the shapes below mirror
the relationship trees loaded in `app.services.records`.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from app.core.constants import BillStatus
from app.schemas.client import ClientOut
from app.schemas.payment import PaymentOut
from app.schemas.project import ProjectOut


class BillCreate(BaseModel):
    """Schema for creating a bill. outstanding_amount defaults to total_amount."""
    bill_number: str = Field(..., min_length=1, max_length=50)
    total_amount: Decimal = Field(..., gt=0)
    client_id: int
    outstanding_amount: Optional[Decimal] = None
    project_id: Optional[int] = None
    due_date: Optional[datetime] = None
    notes: Optional[str] = None
    assigned_to: Optional[int] = None


class BillOut(BaseModel):
    """Schema for bill output"""
    id: int
    bill_number: str
    total_amount: Decimal
    paid_amount: Decimal
    outstanding_amount: Decimal
    status: BillStatus
    due_date: Optional[datetime] = None
    paid_date: Optional[datetime] = None
    notes: Optional[str] = None
    client_id: int
    project_id: Optional[int] = None
    assigned_to: Optional[int] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class BillWithPayments(BillOut):
    payments: List[PaymentOut] = []


class BillWithProject(BillWithPayments):
    project: Optional[ProjectOut] = None


class BillDetail(BillWithProject):
    """Bill with client, project and payments"""
    client: ClientOut


class ProjectDetail(ProjectOut):
    """Project with its client and bills (with payments)"""
    client: ClientOut
    bills: List[BillWithPayments] = []


class ProjectWithBills(ProjectOut):
    bills: List[BillWithPayments] = []


class ClientDetail(ClientOut):
    """Client with projects (bills, payments) and bills (project, payments)"""
    projects: List[ProjectWithBills] = []
    bills: List[BillWithProject] = []


class BillWithClient(BillOut):
    client: ClientOut
    project: Optional[ProjectOut] = None


class PaymentDetail(PaymentOut):
    """Payment with its bill, the bill's client and project"""
    bill: BillWithClient


class PaymentRecorded(BaseModel):
    """Result of recording a payment"""
    payment: PaymentOut
    bill: BillDetail

"""
Pydantic schemas for the admin client overview.
"""

from decimal import Decimal
from typing import List
from pydantic import BaseModel

from app.schemas.bill import BillWithPayments
from app.schemas.client import ClientOut
from app.schemas.project import ProjectOut


class BillsByStatus(BaseModel):
    pending: int = 0
    partial: int = 0
    paid: int = 0
    overdue: int = 0


class ClientSummary(BaseModel):
    total_projects: int
    total_bills: int
    total_area: Decimal
    total_amount: Decimal
    paid_amount: Decimal
    outstanding_amount: Decimal
    payment_percentage: float
    bills_by_status: BillsByStatus


class ClientOverview(ClientOut):
    projects: List[ProjectOut] = []
    bills: List[BillWithPayments] = []
    summary: ClientSummary


class OverviewTotals(BaseModel):
    total_clients: int = 0
    total_projects: int = 0
    total_bills: int = 0
    total_area: Decimal = Decimal("0")
    total_amount: Decimal = Decimal("0")
    total_paid: Decimal = Decimal("0")
    total_outstanding: Decimal = Decimal("0")


class OverviewOut(BaseModel):
    clients: List[ClientOverview]
    totals: OverviewTotals

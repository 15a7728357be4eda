"""
Admin overview: every client with its projects and bills plus a summary.
"""

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.constants import BillStatus
from app.models.bill import Bill
from app.models.client import Client
from app.schemas.bill import BillWithPayments
from app.schemas.client import ClientOut
from app.schemas.overview import (
    BillsByStatus,
    ClientOverview,
    ClientSummary,
    OverviewOut,
    OverviewTotals,
)
from app.schemas.project import ProjectOut

ZERO = Decimal("0")


def summarize_client(client: Client) -> ClientSummary:
    projects = client.projects or []
    bills = client.bills or []

    total_amount = sum((Decimal(b.total_amount or 0) for b in bills), ZERO)
    paid_amount = sum((Decimal(b.paid_amount or 0) for b in bills), ZERO)
    outstanding_amount = sum((Decimal(b.outstanding_amount or 0) for b in bills), ZERO)
    total_area = sum((Decimal(p.area or 0) for p in projects), ZERO)

    counts = {status: 0 for status in BillStatus}
    for bill in bills:
        counts[BillStatus(bill.status)] += 1

    return ClientSummary(
        total_projects=len(projects),
        total_bills=len(bills),
        total_area=total_area,
        total_amount=total_amount,
        paid_amount=paid_amount,
        outstanding_amount=outstanding_amount,
        payment_percentage=float(paid_amount / total_amount * 100) if total_amount > 0 else 0.0,
        bills_by_status=BillsByStatus(
            pending=counts[BillStatus.PENDING],
            partial=counts[BillStatus.PARTIAL],
            paid=counts[BillStatus.PAID],
            overdue=counts[BillStatus.OVERDUE],
        ),
    )


async def client_overview(db: AsyncSession) -> OverviewOut:
    result = await db.execute(
        select(Client)
        .options(
            selectinload(Client.projects),
            selectinload(Client.bills).selectinload(Bill.payments),
        )
        .order_by(Client.name.asc())
        .execution_options(populate_existing=True)
    )
    clients = result.scalars().all()

    overviews = []
    totals = OverviewTotals()
    for client in clients:
        summary = summarize_client(client)
        overviews.append(ClientOverview(
            **ClientOut.model_validate(client).model_dump(),
            projects=[ProjectOut.model_validate(p) for p in client.projects],
            bills=[BillWithPayments.model_validate(b) for b in client.bills],
            summary=summary,
        ))

        totals.total_clients += 1
        totals.total_projects += summary.total_projects
        totals.total_bills += summary.total_bills
        totals.total_area += summary.total_area
        totals.total_amount += summary.total_amount
        totals.total_paid += summary.paid_amount
        totals.total_outstanding += summary.outstanding_amount

    return OverviewOut(clients=overviews, totals=totals)

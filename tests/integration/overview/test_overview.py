"""
Integration tests for /api/client-overview (admin only)
"""

from decimal import Decimal

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories import BillFactory, ClientFactory, PaymentFactory, ProjectFactory


@pytest.mark.asyncio
class TestClientOverview:

    async def test_summary_and_totals(self, admin_client: AsyncClient, user, db_session: AsyncSession):
        acme = await ClientFactory.create_async(db_session, name="Acme", assigned_to=user.id)
        await ProjectFactory.create_async(db_session, client_id=acme.id)
        await BillFactory.create_async(db_session, client_id=acme.id, total_amount=Decimal("3000"))
        paid_bill = await BillFactory.create_async(
            db_session, client_id=acme.id, total_amount=Decimal("1000"),
            paid_amount=Decimal("1000"), status="PAID",
        )
        await PaymentFactory.create_async(db_session, bill_id=paid_bill.id, amount=Decimal("1000"))
        await ClientFactory.create_async(db_session, name="Zed")
        await db_session.commit()

        response = await admin_client.get("/api/client-overview/")

        assert response.status_code == 200
        data = response.json()
        assert [c["name"] for c in data["clients"]] == ["Acme", "Zed"]

        summary = data["clients"][0]["summary"]
        assert summary["total_projects"] == 1
        assert summary["total_bills"] == 2
        assert Decimal(summary["total_area"]) == Decimal("120")
        assert Decimal(summary["total_amount"]) == Decimal("4000")
        assert Decimal(summary["paid_amount"]) == Decimal("1000")
        assert Decimal(summary["outstanding_amount"]) == Decimal("3000")
        assert summary["payment_percentage"] == pytest.approx(25.0)
        assert summary["bills_by_status"] == {"pending": 1, "partial": 0, "paid": 1, "overdue": 0}
        bills = {b["id"]: b for b in data["clients"][0]["bills"]}
        assert len(bills[paid_bill.id]["payments"]) == 1

        empty = data["clients"][1]["summary"]
        assert empty["total_bills"] == 0
        assert empty["payment_percentage"] == 0.0

        totals = data["totals"]
        assert totals["total_clients"] == 2
        assert totals["total_bills"] == 2
        assert Decimal(totals["total_outstanding"]) == Decimal("3000")

    async def test_non_admin_forbidden(self, user_client: AsyncClient):
        response = await user_client.get("/api/client-overview/")

        assert response.status_code == 403

"""
Integration tests for /api/projects
"""

from decimal import Decimal

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories import ProjectFactory


@pytest.mark.asyncio
class TestCreateProject:

    async def test_area_and_total_are_computed(self, user_client: AsyncClient, client_record, user):
        response = await user_client.post(
            "/api/projects/",
            json={
                "name": "Shop banner",
                "length": "10",
                "width": "12",
                "rate_per_sq_ft": "25",
                "client_id": client_record.id,
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert Decimal(data["area"]) == Decimal("120")
        assert Decimal(data["total_amount"]) == Decimal("3000")
        assert data["client"]["id"] == client_record.id
        assert data["assigned_to"] == user.id
        assert data["bills"] == []

    async def test_supplied_area_and_total_are_ignored(self, user_client: AsyncClient, client_record):
        response = await user_client.post(
            "/api/projects/",
            json={
                "name": "Shop banner",
                "length": "2.5",
                "width": "4",
                "rate_per_sq_ft": "10",
                "area": "999",
                "total_amount": "1",
                "client_id": client_record.id,
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert Decimal(data["area"]) == Decimal("10")
        assert Decimal(data["total_amount"]) == Decimal("100")

    async def test_amounts_are_rounded_to_cents(self, user_client: AsyncClient, client_record):
        response = await user_client.post(
            "/api/projects/",
            json={
                "name": "Sticker",
                "length": "1.333",
                "width": "3",
                "rate_per_sq_ft": "7.5",
                "client_id": client_record.id,
            },
        )

        data = response.json()
        assert Decimal(data["area"]) == Decimal("4.00")
        assert Decimal(data["total_amount"]) == Decimal("30.00")

    async def test_dimensions_must_be_positive(self, user_client: AsyncClient, client_record):
        response = await user_client.post(
            "/api/projects/",
            json={"name": "Bad", "length": "0", "width": "12", "rate_per_sq_ft": "25", "client_id": client_record.id},
        )

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid fields: length")

    async def test_admin_cannot_assign_to_unknown_user(self, admin_client: AsyncClient, client_record):
        response = await admin_client.post(
            "/api/projects/",
            json={
                "name": "Banner", "length": "1", "width": "1", "rate_per_sq_ft": "1",
                "client_id": client_record.id, "assigned_to": 999999,
            },
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Assigned user not found"}
        assert (await admin_client.get("/api/projects/")).json() == []

    async def test_unknown_client(self, user_client: AsyncClient):
        response = await user_client.post(
            "/api/projects/",
            json={"name": "Orphan", "length": "1", "width": "1", "rate_per_sq_ft": "1", "client_id": 999999},
        )

        assert response.status_code == 404

    async def test_cannot_attach_to_someone_elses_client(self, other_user_client: AsyncClient, client_record):
        response = await other_user_client.post(
            "/api/projects/",
            json={"name": "Sneaky", "length": "1", "width": "1", "rate_per_sq_ft": "1", "client_id": client_record.id},
        )

        assert response.status_code == 404


@pytest.mark.asyncio
class TestReadProjects:

    async def test_list_and_detail(self, user_client: AsyncClient, client_record, user, db_session: AsyncSession):
        project = await ProjectFactory.create_async(db_session, client_id=client_record.id, assigned_to=user.id)
        await db_session.commit()

        listing = await user_client.get("/api/projects/")
        detail = await user_client.get(f"/api/projects/{project.id}")

        assert [p["id"] for p in listing.json()] == [project.id]
        assert detail.status_code == 200
        assert detail.json()["client"]["name"] == client_record.name

    async def test_ownership_filter(
        self, other_user_client: AsyncClient, admin_client: AsyncClient, client_record, user, db_session: AsyncSession
    ):
        project = await ProjectFactory.create_async(db_session, client_id=client_record.id, assigned_to=user.id)
        await db_session.commit()

        assert (await other_user_client.get("/api/projects/")).json() == []
        assert (await other_user_client.get(f"/api/projects/{project.id}")).status_code == 404
        assert len((await admin_client.get("/api/projects/")).json()) == 1

    async def test_unknown_project(self, user_client: AsyncClient):
        response = await user_client.get("/api/projects/999999")

        assert response.status_code == 404
        assert response.json() == {"error": "Project not found"}

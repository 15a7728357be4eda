"""
Smoke tests for critical endpoints.

Fast tests to detect critical breaks in CI/CD pipeline.
"""

import pytest
from httpx import AsyncClient

from tests.factories.user import UserFactory


@pytest.mark.smoke
@pytest.mark.asyncio
class TestCriticalEndpoints:
    """Smoke tests for critical application endpoints."""

    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    async def test_signup_endpoint(self, client: AsyncClient):
        response = await client.post(
            "/api/auth/signup",
            json={"email": "smoke@test.com", "password": "SmokeTest123!", "name": "Smoke Test"},
        )

        assert response.status_code == 201
        assert response.json()["user"]["email"] == "smoke@test.com"

    async def test_login_endpoint(self, client: AsyncClient, db_session):
        await UserFactory.create_async(db_session, email="login@test.com")
        await db_session.commit()

        response = await client.post(
            "/api/auth/login",
            json={"email": "login@test.com", "password": "Password123!"},
        )

        assert response.status_code == 200
        assert "user_id" in response.cookies

    async def test_me_endpoint(self, user_client: AsyncClient, user):
        response = await user_client.get("/api/auth/me")

        assert response.status_code == 200
        assert response.json()["id"] == user.id

    @pytest.mark.parametrize(
        "path",
        ["/api/clients/", "/api/projects/", "/api/bills/", "/api/payments/", "/api/rates/", "/api/settings/"],
    )
    async def test_list_endpoints(self, user_client: AsyncClient, path):
        response = await user_client.get(path)

        assert response.status_code == 200

    async def test_unauthenticated_is_rejected(self, client: AsyncClient):
        response = await client.get("/api/bills/")

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

"""
Integration tests for the access/error logs and the 500 handler.
"""

import logging

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.api_access_log import APIAccessLog
from app.models.error_log import ErrorLog
from app.services import records


@pytest.mark.asyncio
class TestAccessLogging:

    async def test_request_is_logged(self, user_client: AsyncClient, user, db_session: AsyncSession):
        response = await user_client.post("/api/clients/", json={"name": "Logged"})

        assert "X-Request-ID" in response.headers

        result = await db_session.execute(select(APIAccessLog).filter(APIAccessLog.endpoint == "/api/clients/"))
        entry = result.scalar_one()
        assert entry.user_id == user.id
        assert entry.user_role == "USER"
        assert entry.method == "POST"
        assert entry.status_code == 201
        assert entry.request_id == response.headers["X-Request-ID"]
        assert entry.request_body_hash is not None and len(entry.request_body_hash) == 64

    async def test_request_is_written_to_access_logger(self, user_client: AsyncClient, caplog):
        with caplog.at_level(logging.INFO, logger="access"):
            response = await user_client.get("/api/clients/")

        entries = [r for r in caplog.records if r.name == "access" and r.custom_data["level"] == "request"]
        assert len(entries) == 1
        assert entries[0].custom_data["method"] == "GET"
        assert entries[0].custom_data["path"] == "/api/clients/"
        assert entries[0].custom_data["status_code"] == 200
        assert entries[0].custom_data["request_id"] == response.headers["X-Request-ID"]
        assert entries[0].getMessage().startswith("[REQUEST] Request completed | method=GET")

    async def test_anonymous_request_is_logged(self, client: AsyncClient, db_session: AsyncSession):
        await client.get("/api/clients/")

        entry = (await db_session.execute(select(APIAccessLog))).scalar_one()
        assert entry.user_id is None
        assert entry.status_code == 401

    async def test_health_is_not_logged(self, client: AsyncClient, db_session: AsyncSession):
        assert (await client.get("/health")).json() == {"status": "ok"}

        assert (await db_session.execute(select(APIAccessLog))).scalars().all() == []

    async def test_admin_reads_access_logs(self, admin_client: AsyncClient):
        await admin_client.get("/api/rates/")

        response = await admin_client.get("/api/logs/access", params={"endpoint": "/api/rates"})

        assert response.status_code == 200
        assert [e["endpoint"] for e in response.json()] == ["/api/rates/"]

    async def test_logs_are_admin_only(self, user_client: AsyncClient):
        assert (await user_client.get("/api/logs/access")).status_code == 403
        assert (await user_client.get("/api/logs/errors")).status_code == 403


@pytest.mark.asyncio
class TestErrorLogging:

    async def test_database_error_is_generic_and_stored(
        self, admin_client: AsyncClient, admin_user, db_session: AsyncSession, monkeypatch
    ):
        async def broken_list_bills(*args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("connection lost"))

        monkeypatch.setattr(records, "list_bills", broken_list_bills)

        response = await admin_client.get("/api/bills/")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}

        entry = (await db_session.execute(select(ErrorLog))).scalar_one()
        assert entry.error_type == "OperationalError"
        assert entry.endpoint == "/api/bills/"
        assert entry.method == "GET"
        assert entry.user_id == admin_user.id
        assert entry.resolved is False
        assert "connection lost" in entry.stack_trace

    async def test_resolve_error(self, admin_client: AsyncClient, admin_user, db_session: AsyncSession):
        db_session.add(ErrorLog(error_type="RuntimeError", error_message="boom", endpoint="/api/bills/", method="GET"))
        await db_session.commit()
        error_id = (await db_session.execute(select(ErrorLog.id))).scalar_one()

        listing = await admin_client.get("/api/logs/errors", params={"resolved": False})
        assert [e["id"] for e in listing.json()] == [error_id]

        response = await admin_client.patch(f"/api/logs/errors/{error_id}", json={"resolved": True})

        assert response.status_code == 200
        assert response.json()["resolved"] is True
        assert response.json()["resolved_at"] is not None
        assert (await admin_client.get("/api/logs/errors", params={"resolved": False})).json() == []

    async def test_resolve_unknown_error(self, admin_client: AsyncClient):
        response = await admin_client.patch("/api/logs/errors/999999", json={"resolved": True})

        assert response.status_code == 404

    async def test_error_detail_includes_traceback(self, admin_client: AsyncClient, db_session: AsyncSession):
        db_session.add(ErrorLog(
            error_type="RuntimeError", error_message="boom", stack_trace="Traceback ...", endpoint="/api/bills/",
        ))
        await db_session.commit()
        error_id = (await db_session.execute(select(ErrorLog.id))).scalar_one()

        response = await admin_client.get(f"/api/logs/errors/{error_id}")

        assert response.status_code == 200
        assert response.json()["stack_trace"] == "Traceback ..."


@pytest.mark.asyncio
class TestLogSummary:

    async def test_summary(self, admin_client: AsyncClient, client: AsyncClient, admin_user, db_session: AsyncSession):
        await admin_client.get("/api/rates/")
        await admin_client.get("/api/rates/")
        await client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "wrong-password"})
        db_session.add(ErrorLog(error_type="RuntimeError", error_message="boom"))
        await db_session.commit()

        response = await admin_client.get("/api/logs/summary", params={"hours": 1})

        assert response.status_code == 200
        data = response.json()
        assert data["hours"] == 1
        assert data["total_requests"] == 3
        assert data["unique_users"] == 1
        assert data["failed_logins"] == 1
        assert data["error_rate"] == 0.0
        assert data["unresolved_errors"] == 1
        assert data["requests_by_status"] == {"200": 2, "401": 1}
        assert data["top_endpoints"][0] == {"endpoint": "/api/rates/", "requests": 2}

    async def test_summary_of_empty_window(self, admin_client: AsyncClient):
        data = (await admin_client.get("/api/logs/summary")).json()

        assert data["total_requests"] == 0
        assert data["avg_duration_ms"] == 0.0
        assert data["top_endpoints"] == []

    async def test_summary_is_admin_only(self, user_client: AsyncClient):
        assert (await user_client.get("/api/logs/summary")).status_code == 403

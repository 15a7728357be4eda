"""
Global test fixtures and configuration.

This module provides base fixtures for all tests:
- SQLite database (aiosqlite) emptied around every test
- Database session
- HTTP clients, anonymous and logged in with session cookies
- Base data fixtures (admin, staff user, client record)
"""

import os
import tempfile
import pytest
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession

# Set test environment variables BEFORE importing app
_TEST_DIR = tempfile.mkdtemp(prefix="print-billing-tests-")
_TEST_DB = os.path.join(_TEST_DIR, "test.db")

os.environ["MODE"] = "test"
os.environ["POSTGRES_INTERNAL_URL"] = f"sqlite+aiosqlite:///{_TEST_DB}"
os.environ["POSTGRES_INTERNAL_URL_SYNC"] = f"sqlite:///{_TEST_DB}"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["SENTRY_DSN"] = ""
os.environ["ACCESS_LOG_ENABLED"] = "true"

from app.main import app  # noqa: E402  (creates the schema)
from app.core.constants import USER_ID_COOKIE, USER_ROLE_COOKIE  # noqa: E402
from app.core.security import create_session_markers  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.db.session import SessionAsync, engine_internal  # noqa: E402


def session_cookies(user) -> dict:
    """Signed session cookies for `user`, as set by /api/auth/login."""
    uid_marker, role_marker = create_session_markers(user.id, user.role)
    return {USER_ID_COOKIE: uid_marker, USER_ROLE_COOKIE: role_marker}


# ==================== Database ====================

@pytest.fixture(scope="function")
async def clean_database():
    """
    Empty every table before the test and dispose of pooled connections
    after it, so each test starts from a blank database.
    """
    async with engine_internal.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            await conn.execute(table.delete())
    yield
    await engine_internal.dispose()


@pytest.fixture(scope="function")
async def db_session(clean_database) -> AsyncGenerator[AsyncSession, None]:
    """
    Session on the same database the application uses.

    Data created through factories must be committed before the API can
    see it.
    """
    async with SessionAsync() as session:
        yield session


# ==================== FastAPI Client ====================

@pytest.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Anonymous HTTP client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture(scope="function")
async def admin_client(admin_user) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client logged in as the admin."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        cookies=session_cookies(admin_user),
    ) as ac:
        yield ac


@pytest.fixture(scope="function")
async def user_client(user) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client logged in as a staff (USER role) account."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        cookies=session_cookies(user),
    ) as ac:
        yield ac


@pytest.fixture(scope="function")
async def other_user_client(other_user) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        cookies=session_cookies(other_user),
    ) as ac:
        yield ac


# ==================== Base Data Fixtures ====================

@pytest.fixture
async def user(db_session: AsyncSession):
    """Staff account with the USER role."""
    from tests.factories.user import UserFactory
    user = await UserFactory.create_async(db_session, role="USER")
    await db_session.commit()
    return user


@pytest.fixture
async def other_user(db_session: AsyncSession):
    """A second staff account, to check ownership filtering."""
    from tests.factories.user import UserFactory
    user = await UserFactory.create_async(db_session, role="USER")
    await db_session.commit()
    return user


@pytest.fixture
async def admin_user(db_session: AsyncSession):
    """
    Create admin user for testing admin-only endpoints.
    """
    from tests.factories.user import UserFactory
    user = await UserFactory.create_async(
        db_session,
        email="admin@test.com",
        name="Admin User",
        role="ADMIN",
    )
    await db_session.commit()
    return user


@pytest.fixture
async def client_record(db_session: AsyncSession, user):
    """A client assigned to `user`."""
    from tests.factories.client import ClientFactory
    record = await ClientFactory.create_async(db_session, assigned_to=user.id)
    await db_session.commit()
    return record


@pytest.fixture
async def bill(db_session: AsyncSession, client_record, user):
    """A 3000.00 PENDING bill for `client_record`, assigned to `user`."""
    from tests.factories.bill import BillFactory
    record = await BillFactory.create_async(
        db_session,
        client_id=client_record.id,
        assigned_to=user.id,
        total_amount=3000,
        outstanding_amount=3000,
    )
    await db_session.commit()
    return record

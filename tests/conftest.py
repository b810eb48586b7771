"""Shared test fixtures for DayFlow HRMS."""

import os
import pytest
from httpx import ASGITransport, AsyncClient


ACCESS_SECRET = "test-access-secret-for-unit-tests-0123456789"
REFRESH_SECRET = "test-refresh-secret-for-unit-tests-9876543210"
ADMIN_EMAIL = "admin@acme.io"
ADMIN_PASSWORD = "Adm1n-Passw0rd!"


@pytest.fixture
def app():
    """Create a test app with in-memory DB."""
    os.environ["DAYFLOW_DB_URL"] = "sqlite+aiosqlite://"
    os.environ["DAYFLOW_JWT_ACCESS_SECRET"] = ACCESS_SECRET
    os.environ["DAYFLOW_JWT_REFRESH_SECRET"] = REFRESH_SECRET
    # Cheap hashing keeps the suite fast.
    os.environ["DAYFLOW_PASSWORD_HASH_TIME_COST"] = "1"
    os.environ["DAYFLOW_PASSWORD_HASH_MEMORY_COST"] = "1024"

    # Clear caches and singletons so new env vars take effect
    from dayflow_hrms.common.config import get_settings
    get_settings.cache_clear()

    from dayflow_hrms.deps import reset_singletons
    reset_singletons()

    from dayflow_hrms.app import create_app
    return create_app()


@pytest.fixture
async def client(app):
    # Manually init DB since ASGITransport doesn't run lifespan
    from dayflow_hrms.deps import get_db
    db = get_db()
    await db.init()
    await db.create_all()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    await db.close()


@pytest.fixture
async def admin_signup(client):
    """Sign up Acme Corp and return the response body."""
    resp = await client.post("/auth/admin/signup", json={
        "company_name": "Acme Corp",
        "email": ADMIN_EMAIL,
        "password": ADMIN_PASSWORD,
    })
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture
def admin_headers(admin_signup):
    return {"Authorization": f"Bearer {admin_signup['tokens']['access_token']}"}

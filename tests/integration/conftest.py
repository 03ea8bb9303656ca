"""Integration-test fixtures.

Needs a migrated PostgreSQL reachable through DATABASE_URL
(``alembic upgrade head``); every test here is skipped otherwise.

All integration tests share a single event loop so that the module-level
SQLAlchemy async engine pool (created at import time) stays valid across the
whole session.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from config.settings import settings
from src.cf_gateway.auth.jwt_handler import create_access_token
from src.main import app


def pytest_collection_modifyitems(config, items):  # type: ignore[no-untyped-def]
    if settings.DATABASE_URL:
        return
    skip = pytest.mark.skip(reason="DATABASE_URL not configured")
    for item in items:
        if item.get_closest_marker("integration"):
            item.add_marker(skip)


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client() -> AsyncClient:  # type: ignore[override]
    """Session-scoped async HTTP client with the admin token attached."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        ac.headers.update({"Authorization": f"Bearer {create_access_token()}"})
        yield ac

"""Shared test fixtures.

Environment defaults are set before anything imports config.settings:
JWT_SECRET is required, the admin password hash is generated for a known
test password, and uploads go to a throwaway directory.
"""

import os
import tempfile

import bcrypt

ADMIN_TEST_PASSWORD = "correct-horse-battery"

os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")
os.environ.setdefault(
    "ADMIN_PASSWORD_HASH",
    bcrypt.hashpw(ADMIN_TEST_PASSWORD.encode(), bcrypt.gensalt(rounds=4)).decode(),
)
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="cf-uploads-"))

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from src.cf_gateway.auth.jwt_handler import create_access_token  # noqa: E402
from src.main import app  # noqa: E402


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token()}"}


@pytest.fixture
def admin_password() -> str:
    return ADMIN_TEST_PASSWORD

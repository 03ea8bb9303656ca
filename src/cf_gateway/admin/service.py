"""Admin login: check the configured bcrypt hash, issue an access token."""

import logging

from starlette.concurrency import run_in_threadpool

from config.settings import settings
from src.cf_common.errors import InvalidCredentialsError
from src.cf_gateway.admin.schemas import LoginResponse
from src.cf_gateway.auth.jwt_handler import create_access_token
from src.cf_gateway.auth.password import verify_password

logger = logging.getLogger(__name__)


class AdminAuthService:
    """Stateless service — instantiate once, reuse across requests."""

    def __init__(self, password_hash: str | None = None) -> None:
        self._hash_override = password_hash

    @property
    def _password_hash(self) -> str | None:
        return self._hash_override or settings.ADMIN_PASSWORD_HASH

    async def login(self, password: str) -> LoginResponse:
        hashed = self._password_hash
        if not hashed:
            logger.warning("Admin login attempted but ADMIN_PASSWORD_HASH is not configured")
            raise InvalidCredentialsError()
        # bcrypt is deliberately slow; keep it off the event loop
        if not await run_in_threadpool(verify_password, password, hashed):
            logger.info("Admin login failed")
            raise InvalidCredentialsError()
        return LoginResponse(
            access_token=create_access_token(),
            expires_in=settings.JWT_EXPIRE_MINUTES * 60,
        )

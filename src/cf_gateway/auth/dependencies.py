"""FastAPI dependency: require_admin.

Usage in any router with mutations:
    from src.cf_gateway.auth.dependencies import require_admin

    @router.post("", dependencies=[Depends(require_admin)])
    async def create(...): ...
"""

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

from src.cf_common.errors import AdminAuthRequiredError
from src.cf_gateway.auth.jwt_handler import ADMIN_SUBJECT, decode_token

# auto_error=False so a missing header is rendered through the AppError handler
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


async def require_admin(token: str | None = Depends(oauth2_scheme)) -> str:
    """Return the token subject; raise 401 (AdminAuthRequiredError) otherwise."""
    if not token:
        raise AdminAuthRequiredError()
    payload = decode_token(token)
    if payload.get("sub") != ADMIN_SUBJECT:
        raise AdminAuthRequiredError()
    return ADMIN_SUBJECT

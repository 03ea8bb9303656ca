"""JWT token creation and verification for the admin gate.

HS256 with the shared JWT_SECRET. There is a single principal ("admin"), so
the subject is fixed and no user lookup happens on decode.

No revocation: a token stays valid until it expires (JWT_EXPIRE_MINUTES).
"""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from config.settings import settings
from src.cf_common.errors import AdminAuthRequiredError

ADMIN_SUBJECT = "admin"

_ALGORITHM = settings.JWT_ALGORITHM
_ACCESS_EXPIRE = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)


def create_access_token(subject: str = ADMIN_SUBJECT, now: datetime | None = None) -> str:
    issued = now or datetime.now(UTC)
    payload = {
        "sub": subject,
        "type": "access",
        "iat": issued,
        "exp": issued + _ACCESS_EXPIRE,
    }
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=_ALGORITHM))


def decode_token(token: str) -> dict[str, str]:
    """Decode and validate an access token.

    Raises:
        AdminAuthRequiredError: signature/expiry invalid, or not an access token.
    """
    try:
        payload: dict[str, str] = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],  # explicit list prevents algorithm confusion
        )
    except JWTError:
        raise AdminAuthRequiredError() from None

    if payload.get("type") != "access":
        raise AdminAuthRequiredError()
    return payload

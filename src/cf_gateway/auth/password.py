"""Admin password hashing with bcrypt.

The admin credential is configured as a bcrypt hash (ADMIN_PASSWORD_HASH),
never as plain text. Generate one with:

    python -m src.cf_gateway.auth.password
"""

import getpass
import sys

import bcrypt


def hash_password(plain: str) -> str:
    """Hash a plain-text password with bcrypt. Returns a utf-8 hash string."""
    hashed_bytes: bytes = bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt())
    return hashed_bytes.decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plain-text password against a bcrypt hash.

    A malformed hash counts as a mismatch.
    """
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


def main() -> int:
    first = getpass.getpass("Admin password: ")
    if not first:
        print("Password must not be empty", file=sys.stderr)
        return 1
    if getpass.getpass("Repeat: ") != first:
        print("Passwords do not match", file=sys.stderr)
        return 1
    print(hash_password(first))
    return 0


if __name__ == "__main__":
    sys.exit(main())

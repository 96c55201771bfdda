"""Password hashing and JWT creation/verification for authentication."""

import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from fleetdesk.core.config import settings
from fleetdesk.core.errors import ExpiredToken, MalformedToken

# Min/max lengths for password validation (input validation).
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128

# 9 random bytes encode to 12 URL-safe characters.
TEMP_PASSWORD_BYTES = 9


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def generate_temp_password() -> str:
    """Random password handed out once when an admin creates a user without one."""
    return secrets.token_urlsafe(TEMP_PASSWORD_BYTES)


def create_access_token(user_id: int, *, now: datetime | None = None) -> str:
    """
    Create a JWT access token carrying only the user id (sub), iat and exp.

    Permissions are not embedded; they are read from the store on every request.
    """
    issued_at = now or datetime.now(UTC)
    expire = issued_at + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "exp": expire,
        "iat": issued_at,
    }
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> int:
    """
    Decode and validate JWT; return the embedded user id.

    Raises ExpiredToken when past exp, MalformedToken for a bad signature,
    bad structure or a missing/non-integer sub.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise ExpiredToken("token expired") from e
    except jwt.PyJWTError as e:
        raise MalformedToken(str(e)) from e

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError) as e:
        raise MalformedToken("sub is not a user id") from e
    if user_id < 1:
        raise MalformedToken("sub is not a user id")
    return user_id

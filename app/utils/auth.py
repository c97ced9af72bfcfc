"""
Authentication utilities with JWT tokens and bcrypt password hashing.

- bcrypt with per-password salt for credential storage
- HS256-signed access tokens carrying the user id (``sub``) and the
  server-side session id (``sid``)
- UTC timestamps throughout
"""

import uuid
from datetime import UTC, datetime, timedelta

import bcrypt
from jose import JWTError, jwt

from app.config import settings

ALGORITHM = "HS256"
BCRYPT_MAX_BYTES = 72

# Checked against when the username is unknown so that both login failure
# paths spend the same bcrypt work
_DUMMY_PASSWORD_HASH = bcrypt.hashpw(b"life-rpg-dummy-password", bcrypt.gensalt()).decode(
    "utf-8"
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain text password against a hashed password."""
    password_bytes = plain_password.encode("utf-8")
    if len(password_bytes) > BCRYPT_MAX_BYTES:
        return False
    return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))


def burn_password_check(plain_password: str) -> None:
    """Run a bcrypt check against a throwaway hash and discard the result."""
    verify_password(plain_password, _DUMMY_PASSWORD_HASH)


def get_password_hash(password: str) -> str:
    """Hash a plain text password using bcrypt."""
    pwd_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt()
    hashed_password = bcrypt.hashpw(password=pwd_bytes, salt=salt)
    return hashed_password.decode("utf-8")


def access_token_lifetime() -> timedelta:
    return timedelta(minutes=settings.access_token_expire_minutes)


def create_access_token(
    user_id: uuid.UUID, session_id: uuid.UUID, expires_at: datetime
) -> str:
    """Create a JWT access token bound to one server-side session."""
    to_encode = {
        "sub": str(user_id),
        "sid": str(session_id),
        "exp": expires_at,
        "iat": datetime.now(UTC),
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict | None:
    """Decode and verify a JWT access token."""
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError:
        return None


def extract_token_identity(token: str) -> tuple[uuid.UUID, uuid.UUID] | None:
    """Return ``(user_id, session_id)`` from a valid token, else None."""
    payload = decode_access_token(token)
    if payload is None:
        return None
    try:
        return uuid.UUID(payload["sub"]), uuid.UUID(payload["sid"])
    except (KeyError, TypeError, ValueError):
        return None

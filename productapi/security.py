"""Password hashing and access-token issuing."""

from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

BCRYPT_COST = 10
MAX_PASSWORD_BYTES = 72
TOKEN_LIFETIME = timedelta(hours=72)
SIGNING_ALGORITHM = "HS256"


def hash_password(password: str) -> str:
    """Return a bcrypt hash of the password."""
    raw = password.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        raise ValueError("password length exceeds 72 bytes")
    return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=BCRYPT_COST)).decode("ascii")


def check_password_hash(password: str, hashed_password: str) -> bool:
    """Tell whether the password matches the bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        return False


def get_secret_key() -> bytes:
    """Return the token signing key taken from JWT_SECRET."""
    return os.environ.get("JWT_SECRET", "").encode("utf-8")


def generate_jwt(
    user_id: int, username: str, role: str, secret: bytes | str | None = None
) -> str:
    """Issue an HS256 token for the user that expires after 72 hours."""
    key = get_secret_key() if secret is None else secret
    now = datetime.now(timezone.utc)
    claims = {
        "id": user_id,
        "username": username,
        "role": role,
        "exp": now + TOKEN_LIFETIME,
        "iat": now,
    }
    return jwt.encode(claims, key, algorithm=SIGNING_ALGORITHM)
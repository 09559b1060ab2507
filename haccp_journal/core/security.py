"""
Password hashing and access tokens.

Passwords are stored as bcrypt hashes. Access tokens are HS256 JWTs carrying
the user's id, email and role; they expire after a configurable number of
days.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
import jwt

DEFAULT_ALGORITHM = "HS256"


def hash_password(password: str) -> str:
    """Hash a plain-text password with a fresh bcrypt salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain-text password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_access_token(
    user_id: int,
    email: str,
    role: str,
    secret: str,
    expire_days: int = 7,
    algorithm: str = DEFAULT_ALGORITHM,
) -> str:
    """
    Issue a signed access token.

    Args:
        user_id: Subject user id
        email: User email, echoed for clients
        role: User role, checked by the admin endpoints
        secret: Signing secret
        expire_days: Token lifetime in days
        algorithm: JWT signing algorithm

    Returns:
        The encoded JWT
    """
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "user_id": user_id,
        "email": email,
        "role": role,
        "iat": now,
        "exp": now + timedelta(days=expire_days),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, algorithm: str = DEFAULT_ALGORITHM) -> dict[str, Any]:
    """Decode and validate a JWT. Raises jwt.PyJWTError on failure."""
    payload = jwt.decode(token, secret, algorithms=[algorithm])
    if not isinstance(payload.get("user_id"), int):
        raise jwt.InvalidTokenError("token has no user id")
    return payload

"""Bearer token issuing and verification."""

from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

ALGORITHM = "HS256"


def create_access_token(
    subject: str,
    secret: str,
    expiry_minutes: int,
    role: str = "admin",
    now: datetime | None = None,
) -> str:
    """Sign a JWT for an authenticated administrator."""
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "role": role,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=expiry_minutes),
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def decode_access_token(token: str, secret: str) -> dict[str, Any]:
    """Verify a JWT and return its claims.

    Raises:
        jwt.InvalidTokenError: If the token is malformed, forged or expired
    """
    return jwt.decode(token, secret, algorithms=[ALGORITHM])


def credentials_match(email: str, password: str, expected_email: str, expected_password: str) -> bool:
    """Constant-time comparison of a login attempt with the admin credentials."""
    email_ok = secrets.compare_digest(
        email.strip().lower().encode(), expected_email.strip().lower().encode()
    )
    password_ok = secrets.compare_digest(password.encode(), expected_password.encode())
    return email_ok and password_ok

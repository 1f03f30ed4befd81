"""Security utilities: password hashing and verification tokens."""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Tuple

import bcrypt

BCRYPT_ROUNDS = 10


def get_password_hash(password: str) -> str:
    """Hash a password with bcrypt."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in TIMESTAMP columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def generate_verification_token(ttl_hours: int) -> Tuple[str, datetime]:
    """
    Create a random email verification token.

    Returns:
        (token, expires_at) where token is 64 hex characters.
    """
    token = secrets.token_hex(32)
    return token, utcnow() + timedelta(hours=ttl_hours)

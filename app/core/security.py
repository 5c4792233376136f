"""Password hashing and JWT creation/verification for authentication."""

import re
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import settings

# Bcrypt cost (rounds). Existing hashes were created at cost 10.
BCRYPT_ROUNDS = 10

# Credential rules shared by signup, profile updates and the create_user CLI.
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128
USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 50
# No '@' allowed, so a login identifier can never match one account's email and another's username.
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash (constant-time compare inside bcrypt)."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def password_problem(password: str) -> str | None:
    """Return a user-facing message if the password breaks the length rules, else None."""
    if len(password) < PASSWORD_MIN_LEN:
        return f"Password must be at least {PASSWORD_MIN_LEN} characters long"
    if len(password) > PASSWORD_MAX_LEN:
        return f"Password must be at most {PASSWORD_MAX_LEN} characters long"
    return None


def username_problem(username: str) -> str | None:
    """Return a user-facing message if the username is malformed, else None."""
    if not (USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN):
        return (
            f"Username must be between {USERNAME_MIN_LEN} and {USERNAME_MAX_LEN} characters"
        )
    if not USERNAME_PATTERN.match(username):
        return "Username may only contain letters, digits, '_', '.' and '-'"
    return None


def create_access_token(sub: str | int, role: str) -> str:
    """Create a JWT access token with sub (user id), role, and exp."""
    now = datetime.now(UTC)
    expire = now + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(sub),
        "role": role,
        "exp": expire,
        "iat": now,
    }
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.encode(
        payload,
        secret,
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, role, exp, iat).
    Raises jwt.PyJWTError on invalid or expired token.
    """
    secret = settings.JWT_SECRET.get_secret_value()
    return jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
    )

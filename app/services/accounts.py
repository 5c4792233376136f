"""
Account lifecycle: login with lockout, signup under the configured approval
policy, profile and password changes.

Every function takes the request's Session and re-reads the user row, so
lockouts and suspensions are visible to all sessions immediately.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import atomic
from app.core.errors import (
    AccountLockedError,
    AccountPendingError,
    AccountSuspendedError,
    ConflictError,
    ForbiddenError,
    InvalidCredentialsError,
    InvalidInputError,
)
from app.core.security import (
    create_access_token,
    hash_password,
    password_problem,
    username_problem,
    verify_password,
)
from app.models.user import (
    ROLE_ADMIN,
    ROLE_USER,
    STATUS_ACTIVE,
    STATUS_PENDING,
    STATUS_SUSPENDED,
    User,
)
from app.schemas.auth import ProfileUpdateRequest, SignupRequest

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

SIGNUP_MESSAGES = {
    "admin": "Admin account created successfully! You can now log in.",
    STATUS_PENDING: "Account created successfully! Please wait for admin approval.",
    STATUS_ACTIVE: "Account created successfully! You can now log in.",
}


@dataclass
class LoginResult:
    """Outcome of a successful login. The token is opaque to callers."""

    user: User
    token: str


def as_utc(value: datetime | None) -> datetime | None:
    """Treat naive timestamps from the store as UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


def lock_minutes_remaining(locked_until: datetime, now: datetime) -> int:
    """Whole minutes until the lock expires, rounded up (never less than 1)."""
    seconds = (locked_until - now).total_seconds()
    return max(1, math.ceil(seconds / 60))


def find_by_identifier(db: Session, identifier: str) -> User | None:
    """Case-insensitive lookup matching either email or username in one query."""
    ident = identifier.strip().lower()
    return (
        db.query(User)
        .filter(or_(func.lower(User.email) == ident, func.lower(User.username) == ident))
        .first()
    )


def authenticate(
    db: Session,
    identifier: str,
    password: str,
    settings: "Settings",
    now: datetime | None = None,
) -> LoginResult:
    """
    Check credentials and return a LoginResult with a fresh token.

    Raises (after committing any counter/lock change):
      InvalidCredentialsError - unknown identifier, or wrong password below the limit
      AccountLockedError      - lock still running, or this failure reached the limit
      AccountSuspendedError / AccountPendingError - status gate; password not checked
    """
    now = now or datetime.now(UTC)
    user = find_by_identifier(db, identifier)
    if user is None:
        raise InvalidCredentialsError()

    locked_until = as_utc(user.locked_until)
    if locked_until is not None and locked_until > now:
        minutes = lock_minutes_remaining(locked_until, now)
        raise AccountLockedError(
            f"Account is temporarily locked. Please try again in {minutes} minutes.",
            retry_after_minutes=minutes,
        )

    if user.status == STATUS_SUSPENDED:
        raise AccountSuspendedError()
    if user.status == STATUS_PENDING:
        raise AccountPendingError()

    if not verify_password(password, user.password_hash):
        raise _record_failed_attempt(db, user, settings, now)

    with atomic(db):
        user.failed_login_attempts = 0
        user.locked_until = None
        user.last_login = now
    db.refresh(user)

    token = create_access_token(sub=user.id, role=user.role)
    logger.info("Login succeeded: user_id=%s", user.id)
    return LoginResult(user=user, token=token)


def _record_failed_attempt(
    db: Session, user: User, settings: "Settings", now: datetime
) -> InvalidCredentialsError | AccountLockedError:
    """Bump the failure counter, lock at the limit, and return the error to raise."""
    max_attempts = settings.MAX_FAILED_LOGIN_ATTEMPTS
    user_id = user.id
    with atomic(db):
        # Incremented in SQL so concurrent failures are all counted.
        db.query(User).filter(User.id == user_id).update(
            {User.failed_login_attempts: func.coalesce(User.failed_login_attempts, 0) + 1},
            synchronize_session=False,
        )
        attempts = (
            db.query(User.failed_login_attempts).filter(User.id == user_id).scalar()
        )
        locked = attempts >= max_attempts
        user.locked_until = now + timedelta(minutes=settings.LOCKOUT_MINUTES) if locked else None

    if locked:
        logger.warning(
            "Account locked after %s failed logins: user_id=%s", attempts, user_id
        )
        return AccountLockedError(
            "Too many failed login attempts. "
            f"Account locked for {settings.LOCKOUT_MINUTES} minutes.",
            retry_after_minutes=settings.LOCKOUT_MINUTES,
        )

    remaining = max_attempts - attempts
    logger.info("Login failed: user_id=%s failed_attempts=%s", user_id, attempts)
    noun = "attempt" if remaining == 1 else "attempts"
    return InvalidCredentialsError(
        f"Invalid credentials. {remaining} {noun} remaining before account lockout.",
        attempts_remaining=remaining,
    )


def _initial_role_and_status(db: Session, settings: "Settings") -> tuple[str, str]:
    policy = settings.SIGNUP_APPROVAL_POLICY
    if policy == "auto_approve":
        return ROLE_USER, STATUS_ACTIVE
    if policy == "first_user_admin" and db.query(User.id).first() is None:
        return ROLE_ADMIN, STATUS_ACTIVE
    return ROLE_USER, STATUS_PENDING


def _ensure_available(
    db: Session,
    email: str | None,
    username: str | None,
    exclude_id: str | None = None,
) -> None:
    """Raise ConflictError if another row already holds the email or username."""
    if email is not None:
        q = db.query(User.id).filter(func.lower(User.email) == email)
        if exclude_id is not None:
            q = q.filter(User.id != exclude_id)
        if q.first() is not None:
            raise ConflictError("Email address is already in use")
    if username is not None:
        q = db.query(User.id).filter(func.lower(User.username) == username)
        if exclude_id is not None:
            q = q.filter(User.id != exclude_id)
        if q.first() is not None:
            raise ConflictError("Username is already taken")


def register(
    db: Session, payload: SignupRequest, settings: "Settings"
) -> tuple[User, str]:
    """
    Create an account. Returns (user, message).

    Raises InvalidInputError for bad password/username, ConflictError for a
    duplicate email or username (no row is written in that case).
    """
    problem = password_problem(payload.password)
    if problem:
        raise InvalidInputError(problem)
    if payload.confirm_password is not None and payload.confirm_password != payload.password:
        raise InvalidInputError("Passwords do not match")
    username = payload.username.strip()
    problem = username_problem(username)
    if problem:
        raise InvalidInputError(problem)

    email = str(payload.email).strip().lower()
    username = username.lower()
    try:
        _ensure_available(db, email, username)
    except ConflictError:
        raise ConflictError("Email or username already exists") from None

    role, status = _initial_role_and_status(db, settings)
    user = User(
        email=email,
        username=username,
        password_hash=hash_password(payload.password),
        role=role,
        status=status,
    )
    try:
        with atomic(db):
            db.add(user)
    except IntegrityError:
        # Lost a race with a concurrent signup for the same email/username.
        raise ConflictError("Email or username already exists") from None
    db.refresh(user)

    logger.info(
        "Signup: user_id=%s role=%s status=%s policy=%s",
        user.id,
        role,
        status,
        settings.SIGNUP_APPROVAL_POLICY,
    )
    message = SIGNUP_MESSAGES["admin"] if role == ROLE_ADMIN else SIGNUP_MESSAGES[status]
    return user, message


def update_profile(
    db: Session, target: User, actor: User, updates: ProfileUpdateRequest
) -> User:
    """
    Apply email/username/language changes to target on behalf of actor.

    actor must be the target or an admin. Email and username follow the
    signup rules and must not belong to any other account.
    """
    if actor.id != target.id and actor.role != ROLE_ADMIN:
        raise ForbiddenError("You can only update your own profile")

    email = str(updates.email).strip().lower() if updates.email is not None else None
    username = None
    if updates.username is not None:
        username = updates.username.strip()
        problem = username_problem(username)
        if problem:
            raise InvalidInputError(problem)
        username = username.lower()

    if email is None and username is None and updates.language is None:
        raise InvalidInputError("No valid updates provided")

    _ensure_available(db, email, username, exclude_id=target.id)

    try:
        with atomic(db):
            if email is not None:
                target.email = email
            if username is not None:
                target.username = username
            if updates.language is not None:
                target.language = updates.language
    except IntegrityError:
        raise ConflictError("Email or username already exists") from None
    db.refresh(target)
    logger.info("Profile updated: user_id=%s by=%s", target.id, actor.id)
    return target


def change_password(
    db: Session, user: User, current_password: str, new_password: str
) -> None:
    """Replace the caller's password after checking the current one."""
    if not verify_password(current_password, user.password_hash):
        raise InvalidInputError("Current password is incorrect")
    problem = password_problem(new_password)
    if problem:
        raise InvalidInputError(problem)
    with atomic(db):
        user.password_hash = hash_password(new_password)
    logger.info("Password changed: user_id=%s", user.id)

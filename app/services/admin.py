"""Admin approval gate and user management (callers are checked for admin role by the API)."""

import logging

from sqlalchemy.orm import Session

from app.core.database import atomic
from app.core.errors import ConflictError, ForbiddenError, NotFoundError
from app.models.user import STATUS_ACTIVE, STATUS_PENDING, STATUS_SUSPENDED, User

logger = logging.getLogger(__name__)


def list_pending_users(db: Session) -> list[User]:
    """Accounts waiting for approval, oldest signup first."""
    return (
        db.query(User)
        .filter(User.status == STATUS_PENDING)
        .order_by(User.created_at.asc())
        .all()
    )


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.created_at.asc()).all()


def _get_user(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError("User not found")
    return user


def _get_pending_user(db: Session, user_id: str) -> User:
    user = (
        db.query(User)
        .filter(User.id == user_id, User.status == STATUS_PENDING)
        .first()
    )
    if user is None:
        raise NotFoundError("Pending user not found")
    return user


def approve_user(db: Session, user_id: str, admin: User) -> User:
    """
    pending -> active.

    A user that is not pending (already approved, suspended, or unknown) is a
    NotFoundError, so approving twice fails the second time.
    """
    user = _get_pending_user(db, user_id)
    with atomic(db):
        user.status = STATUS_ACTIVE
    db.refresh(user)
    logger.info("User approved: user_id=%s by=%s", user.id, admin.id)
    return user


def reject_user(db: Session, user_id: str, admin: User) -> None:
    """Permanently delete a pending signup. Non-pending users are never touched."""
    user = _get_pending_user(db, user_id)
    with atomic(db):
        db.delete(user)
    logger.info("User rejected and deleted: user_id=%s by=%s", user_id, admin.id)


def _set_active_state(db: Session, user_id: str, admin: User, status: str) -> User:
    user = _get_user(db, user_id)
    if user.status == STATUS_PENDING:
        raise ConflictError("Pending users must be approved or rejected first")
    if status == STATUS_SUSPENDED and user.id == admin.id:
        raise ForbiddenError("You cannot suspend your own account")
    if user.status != status:
        # failed_login_attempts and locked_until stay as they are.
        with atomic(db):
            user.status = status
        db.refresh(user)
        logger.info("User status changed: user_id=%s status=%s by=%s", user.id, status, admin.id)
    return user


def suspend_user(db: Session, user_id: str, admin: User) -> User:
    """active -> suspended (no-op if already suspended)."""
    return _set_active_state(db, user_id, admin, STATUS_SUSPENDED)


def activate_user(db: Session, user_id: str, admin: User) -> User:
    """suspended -> active (no-op if already active)."""
    return _set_active_state(db, user_id, admin, STATUS_ACTIVE)


def delete_user(db: Session, user_id: str, admin: User) -> None:
    """Hard-delete an account and everything it owns. Admins cannot delete themselves."""
    if user_id == admin.id:
        raise ForbiddenError("You cannot delete your own account")
    user = _get_user(db, user_id)
    with atomic(db):
        db.delete(user)
    logger.info("User deleted: user_id=%s by=%s", user_id, admin.id)


def get_user(db: Session, user_id: str) -> User:
    """Load any account by id (admin profile edits)."""
    return _get_user(db, user_id)

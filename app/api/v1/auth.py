"""Login, signup, profile and admin user management; auth dependencies (get_current_user, require_admin)."""

from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.core.errors import ForbiddenError, UnauthorizedError
from app.core.security import decode_access_token
from app.models.user import ROLE_ADMIN, STATUS_ACTIVE, User
from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    PasswordChangeRequest,
    PendingUsersResponse,
    ProfileResponse,
    ProfileUpdateRequest,
    SignupRequest,
    SignupResponse,
    UserOut,
    UsersListResponse,
    UserUpdatedResponse,
)
from app.services import accounts, admin

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """
    Dependency: require a valid Bearer JWT and return the current, active user.

    The row is re-read on every request so suspensions take effect on existing
    tokens. Raises 401 if the token is missing/invalid, 403 if the account is
    not active.
    """
    if credentials is None:
        raise UnauthorizedError("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise UnauthorizedError("Invalid or expired token") from None
    sub = payload.get("sub")
    if not sub or not isinstance(sub, str):
        raise UnauthorizedError("Invalid token payload")
    user = db.query(User).filter(User.id == sub).first()
    if user is None:
        raise UnauthorizedError("User not found")
    if user.status != STATUS_ACTIVE:
        raise ForbiddenError(f"Account is {user.status}")
    return user


def require_admin(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    if current_user.role != ROLE_ADMIN:
        raise ForbiddenError("Admin access required")
    return current_user


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> LoginResponse:
    """
    Authenticate with email or username and password; returns a JWT and the account.
    Include the token in the Authorization header as: Bearer <token>

    401 invalid credentials, 403 suspended or pending approval, 423 locked.
    """
    result = accounts.authenticate(db, body.email_or_username, body.password, settings)
    return LoginResponse(token=result.token, user=UserOut.model_validate(result.user))


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
def signup(
    body: SignupRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> SignupResponse:
    """Create an account; whether it can log in right away depends on SIGNUP_APPROVAL_POLICY."""
    user, message = accounts.register(db, body, settings)
    return SignupResponse(message=message, user=UserOut.model_validate(user))


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    current_user: Annotated[User, Depends(get_current_user)],
) -> ProfileResponse:
    return ProfileResponse(user=UserOut.model_validate(current_user))


@router.put("/profile", response_model=UserUpdatedResponse)
def update_profile(
    body: ProfileUpdateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserUpdatedResponse:
    user = accounts.update_profile(db, current_user, current_user, body)
    return UserUpdatedResponse(
        message="Profile updated successfully", user=UserOut.model_validate(user)
    )


@router.put("/password", response_model=MessageResponse)
def change_password(
    body: PasswordChangeRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    accounts.change_password(db, current_user, body.current_password, body.new_password)
    return MessageResponse(message="Password updated successfully")


@router.get("/pending-users", response_model=PendingUsersResponse)
def list_pending_users(
    _admin: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> PendingUsersResponse:
    """Accounts waiting for approval (admin only)."""
    users = admin.list_pending_users(db)
    return PendingUsersResponse(pending_users=[UserOut.model_validate(u) for u in users])


@router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UsersListResponse:
    """List all users (admin only)."""
    users = admin.list_users(db)
    return UsersListResponse(users=[UserOut.model_validate(u) for u in users])


@router.post("/approve-user/{user_id}", response_model=UserUpdatedResponse)
def approve_user(
    user_id: str,
    current_admin: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserUpdatedResponse:
    """pending -> active. 404 when the user is unknown or not pending."""
    user = admin.approve_user(db, user_id, current_admin)
    return UserUpdatedResponse(
        message="User approved successfully", user=UserOut.model_validate(user)
    )


@router.delete("/reject-user/{user_id}", response_model=MessageResponse)
def reject_user(
    user_id: str,
    current_admin: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete a pending signup. 404 when the user is unknown or not pending."""
    admin.reject_user(db, user_id, current_admin)
    return MessageResponse(message="User rejected successfully")


@router.post("/suspend-user/{user_id}", response_model=UserUpdatedResponse)
def suspend_user(
    user_id: str,
    current_admin: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserUpdatedResponse:
    user = admin.suspend_user(db, user_id, current_admin)
    return UserUpdatedResponse(
        message="User suspended successfully", user=UserOut.model_validate(user)
    )


@router.post("/activate-user/{user_id}", response_model=UserUpdatedResponse)
def activate_user(
    user_id: str,
    current_admin: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserUpdatedResponse:
    user = admin.activate_user(db, user_id, current_admin)
    return UserUpdatedResponse(
        message="User activated successfully", user=UserOut.model_validate(user)
    )


@router.put("/users/{user_id}", response_model=UserUpdatedResponse)
def update_user(
    user_id: str,
    body: ProfileUpdateRequest,
    current_admin: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> UserUpdatedResponse:
    """Edit another account's email/username/language (admin only)."""
    target = admin.get_user(db, user_id)
    user = accounts.update_profile(db, target, current_admin, body)
    return UserUpdatedResponse(
        message="User updated successfully", user=UserOut.model_validate(user)
    )


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: str,
    current_admin: Annotated[User, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Delete an account and all its data. Admins cannot delete themselves."""
    admin.delete_user(db, user_id, current_admin)
    return MessageResponse(message="User deleted successfully")

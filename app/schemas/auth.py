"""Request/response schemas for auth and admin endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

Language = Literal["en", "es"]


class LoginRequest(BaseModel):
    """Credentials for login; the identifier may be an email or a username."""

    model_config = ConfigDict(populate_by_name=True)

    email_or_username: str = Field(
        ...,
        alias="emailOrUsername",
        min_length=1,
        max_length=255,
        description="Email or username (case-insensitive)",
    )
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class SignupRequest(BaseModel):
    """New account; length and format rules are enforced by the account service."""

    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr = Field(..., description="Email address")
    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, max_length=1024, description="Password")
    confirm_password: str | None = Field(
        default=None,
        alias="confirmPassword",
        description="Optional; must equal password when given",
    )


class ProfileUpdateRequest(BaseModel):
    """Partial profile update; omitted fields are left unchanged."""

    email: EmailStr | None = None
    username: str | None = Field(default=None, max_length=255)
    language: Language | None = None


class PasswordChangeRequest(BaseModel):
    """Change the caller's own password."""

    model_config = ConfigDict(populate_by_name=True)

    current_password: str = Field(..., alias="currentPassword", min_length=1, max_length=1024)
    new_password: str = Field(..., alias="newPassword", min_length=1, max_length=1024)


class UserOut(BaseModel):
    """Public view of an account (never includes the password hash or lockout fields)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    username: str
    role: str
    status: str
    language: str
    created_at: datetime | None = None
    last_login: datetime | None = None


class LoginResponse(BaseModel):
    """Bearer token and account returned after successful login."""

    message: str = "Login successful"
    token: str = Field(..., description="JWT access token (send as Authorization: Bearer <token>)")
    user: UserOut


class SignupResponse(BaseModel):
    message: str
    user: UserOut


class ProfileResponse(BaseModel):
    user: UserOut


class UserUpdatedResponse(BaseModel):
    message: str
    user: UserOut


class MessageResponse(BaseModel):
    message: str


class PendingUsersResponse(BaseModel):
    """Response for GET /auth/pending-users (admin only)."""

    model_config = ConfigDict(populate_by_name=True)

    pending_users: list[UserOut] = Field(..., alias="pendingUsers")


class UsersListResponse(BaseModel):
    """Response for GET /auth/users (admin only)."""

    users: list[UserOut]

"""Pydantic request/response schemas."""

from app.schemas.auth import (
    LoginRequest,
    LoginResponse,
    PasswordChangeRequest,
    ProfileUpdateRequest,
    SignupRequest,
    UserOut,
)
from app.schemas.fabric import (
    FabricCreate,
    FabricOut,
    FabricUpdate,
    UsageCreate,
    UsageEntryOut,
)
from app.schemas.health import HealthResponse
from app.schemas.project import (
    PatternCreate,
    PatternOut,
    PatternUpdate,
    ProjectCreate,
    ProjectOut,
    ProjectUpdate,
)
from app.schemas.upload import DeleteFileRequest, UploadResponse

__all__ = [
    "DeleteFileRequest",
    "FabricCreate",
    "FabricOut",
    "FabricUpdate",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "PasswordChangeRequest",
    "PatternCreate",
    "PatternOut",
    "PatternUpdate",
    "ProfileUpdateRequest",
    "ProjectCreate",
    "ProjectOut",
    "ProjectUpdate",
    "SignupRequest",
    "UploadResponse",
    "UsageCreate",
    "UsageEntryOut",
    "UserOut",
]

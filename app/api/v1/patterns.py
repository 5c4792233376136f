"""Pattern library endpoints (owner-scoped CRUD and pinning)."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.models.user import User
from app.schemas.auth import MessageResponse
from app.schemas.fabric import PinResponse
from app.schemas.project import (
    PatternCreate,
    PatternOut,
    PatternResponse,
    PatternSavedResponse,
    PatternsListResponse,
    PatternUpdate,
)
from app.services import patterns

router = APIRouter()


@router.get("", response_model=PatternsListResponse)
def list_patterns(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> PatternsListResponse:
    items = patterns.list_patterns(db, current_user.id)
    return PatternsListResponse(patterns=[PatternOut.model_validate(p) for p in items])


@router.get("/{pattern_id}", response_model=PatternResponse)
def get_pattern(
    pattern_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> PatternResponse:
    pattern = patterns.get_pattern(db, pattern_id, current_user.id)
    return PatternResponse(pattern=PatternOut.model_validate(pattern))


@router.post("", response_model=PatternSavedResponse, status_code=status.HTTP_201_CREATED)
def create_pattern(
    body: PatternCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> PatternSavedResponse:
    pattern = patterns.create_pattern(db, current_user.id, body)
    return PatternSavedResponse(
        message="Pattern created successfully", pattern=PatternOut.model_validate(pattern)
    )


@router.put("/{pattern_id}", response_model=PatternSavedResponse)
def update_pattern(
    pattern_id: str,
    body: PatternUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> PatternSavedResponse:
    pattern = patterns.update_pattern(db, pattern_id, current_user.id, body)
    return PatternSavedResponse(
        message="Pattern updated successfully", pattern=PatternOut.model_validate(pattern)
    )


@router.delete("/{pattern_id}", response_model=MessageResponse)
def delete_pattern(
    pattern_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    patterns.delete_pattern(db, pattern_id, current_user.id)
    return MessageResponse(message="Pattern deleted successfully")


@router.patch("/{pattern_id}/pin", response_model=PinResponse)
def toggle_pin(
    pattern_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> PinResponse:
    is_pinned = patterns.toggle_pin(db, pattern_id, current_user.id)
    return PinResponse(message="Pattern pin status updated", is_pinned=is_pinned)

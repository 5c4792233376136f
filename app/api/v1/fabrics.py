"""Fabric stash endpoints: CRUD, pinning, usage recording and history (owner-scoped)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.models.user import User
from app.schemas.auth import MessageResponse
from app.schemas.fabric import (
    FabricCreate,
    FabricOut,
    FabricResponse,
    FabricSavedResponse,
    FabricsListResponse,
    FabricUpdate,
    PinResponse,
    UsageCreate,
    UsageHistoryResponse,
    UsageRecordedResponse,
)
from app.services import fabrics

router = APIRouter()


@router.get("", response_model=FabricsListResponse)
def list_fabrics(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> FabricsListResponse:
    items = fabrics.list_fabrics(db, current_user.id)
    return FabricsListResponse(fabrics=[FabricOut.model_validate(f) for f in items])


# Declared before /{fabric_id} so "usage" is not taken for an id.
@router.get("/usage/history", response_model=UsageHistoryResponse)
def get_usage_history(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    fabric_id: Annotated[str | None, Query(max_length=36)] = None,
) -> UsageHistoryResponse:
    """The caller's usage entries, newest first; optionally for one fabric."""
    history = fabrics.usage_history(db, current_user.id, fabric_id=fabric_id)
    return UsageHistoryResponse(usage_history=history)


@router.get("/{fabric_id}", response_model=FabricResponse)
def get_fabric(
    fabric_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> FabricResponse:
    fabric = fabrics.get_fabric(db, fabric_id, current_user.id)
    return FabricResponse(fabric=FabricOut.model_validate(fabric))


@router.post("", response_model=FabricSavedResponse, status_code=status.HTTP_201_CREATED)
def create_fabric(
    body: FabricCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> FabricSavedResponse:
    fabric = fabrics.create_fabric(db, current_user.id, body)
    return FabricSavedResponse(
        message="Fabric created successfully", fabric=FabricOut.model_validate(fabric)
    )


@router.put("/{fabric_id}", response_model=FabricSavedResponse)
def update_fabric(
    fabric_id: str,
    body: FabricUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> FabricSavedResponse:
    fabric = fabrics.update_fabric(db, fabric_id, current_user.id, body)
    return FabricSavedResponse(
        message="Fabric updated successfully", fabric=FabricOut.model_validate(fabric)
    )


@router.delete("/{fabric_id}", response_model=MessageResponse)
def delete_fabric(
    fabric_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    fabrics.delete_fabric(db, fabric_id, current_user.id)
    return MessageResponse(message="Fabric deleted successfully")


@router.patch("/{fabric_id}/pin", response_model=PinResponse)
def toggle_pin(
    fabric_id: str,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> PinResponse:
    is_pinned = fabrics.toggle_pin(db, fabric_id, current_user.id)
    return PinResponse(message="Fabric pin status updated", is_pinned=is_pinned)


@router.post("/{fabric_id}/usage", response_model=UsageRecordedResponse)
def record_usage(
    fabric_id: str,
    body: UsageCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UsageRecordedResponse:
    """
    Take yards_used from the fabric and log it against project_name.

    Remaining yardage never goes below 0; the usage entry keeps the amount
    requested. Both writes commit together or not at all.
    """
    _, yards_left = fabrics.record_usage(db, fabric_id, current_user.id, body)
    return UsageRecordedResponse(yards_left=yards_left)

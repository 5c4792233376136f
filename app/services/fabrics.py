"""Fabric stash: owner-scoped CRUD, pinning, and usage recording."""

import logging

from sqlalchemy.orm import Session

from app.core.database import atomic
from app.core.errors import NotFoundError
from app.models import Fabric, Project, UsageEntry
from app.schemas.fabric import FabricCreate, FabricUpdate, UsageCreate, UsageEntryOut

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "total_yards", "is_pinned")


def remaining_after_usage(total_yards: float, yards_used: float) -> float:
    """
    Yardage left after taking yards_used; floored at zero.

    Over-use is not an error: the stash simply reads empty.
    """
    return max(0.0, total_yards - yards_used)


def _owned_fabric(
    db: Session, fabric_id: str, user_id: str, for_update: bool = False
) -> Fabric:
    q = db.query(Fabric).filter(Fabric.id == fabric_id, Fabric.user_id == user_id)
    if for_update:
        q = q.with_for_update()
    fabric = q.first()
    if fabric is None:
        raise NotFoundError("Fabric not found")
    return fabric


def list_fabrics(db: Session, user_id: str) -> list[Fabric]:
    """The user's fabrics, pinned first, newest first within each group."""
    return (
        db.query(Fabric)
        .filter(Fabric.user_id == user_id)
        .order_by(Fabric.is_pinned.desc(), Fabric.created_at.desc())
        .all()
    )


def get_fabric(db: Session, fabric_id: str, user_id: str) -> Fabric:
    return _owned_fabric(db, fabric_id, user_id)


def create_fabric(db: Session, user_id: str, body: FabricCreate) -> Fabric:
    fabric = Fabric(user_id=user_id, **body.model_dump())
    with atomic(db):
        db.add(fabric)
    db.refresh(fabric)
    logger.info("Fabric created: fabric_id=%s user_id=%s", fabric.id, user_id)
    return fabric


def update_fabric(
    db: Session, fabric_id: str, user_id: str, body: FabricUpdate
) -> Fabric:
    """Apply only the fields present in the request; required columns are never nulled."""
    fabric = _owned_fabric(db, fabric_id, user_id)
    changes = body.model_dump(exclude_unset=True)
    for field in REQUIRED_FIELDS:
        if field in changes and changes[field] is None:
            del changes[field]
    with atomic(db):
        for field, value in changes.items():
            setattr(fabric, field, value)
    db.refresh(fabric)
    return fabric


def delete_fabric(db: Session, fabric_id: str, user_id: str) -> None:
    fabric = _owned_fabric(db, fabric_id, user_id)
    with atomic(db):
        db.delete(fabric)
    logger.info("Fabric deleted: fabric_id=%s user_id=%s", fabric_id, user_id)


def toggle_pin(db: Session, fabric_id: str, user_id: str) -> bool:
    fabric = _owned_fabric(db, fabric_id, user_id)
    with atomic(db):
        fabric.is_pinned = not fabric.is_pinned
    return bool(fabric.is_pinned)


def record_usage(
    db: Session, fabric_id: str, user_id: str, body: UsageCreate
) -> tuple[UsageEntry, float]:
    """
    Record yardage taken from a fabric. Returns (entry, yards_left).

    The usage insert and the yardage decrement commit together or not at
    all; on any error both are rolled back and the error propagates. The
    entry stores the requested yards_used even when the stash is clamped to 0.
    """
    fabric = _owned_fabric(db, fabric_id, user_id, for_update=True)
    if body.project_id is not None:
        project = (
            db.query(Project.id)
            .filter(Project.id == body.project_id, Project.user_id == user_id)
            .first()
        )
        if project is None:
            db.rollback()
            raise NotFoundError("Project not found")

    clamped = body.yards_used > fabric.total_yards
    yards_left = remaining_after_usage(fabric.total_yards, body.yards_used)
    entry = UsageEntry(
        fabric_id=fabric.id,
        user_id=user_id,
        project_id=body.project_id,
        yards_used=body.yards_used,
        project_name=body.project_name,
        notes=body.notes,
    )
    try:
        with atomic(db):
            db.add(entry)
            fabric.total_yards = yards_left
            db.flush()
    except Exception:
        logger.exception(
            "Recording usage failed, rolled back: fabric_id=%s user_id=%s",
            fabric_id,
            user_id,
        )
        raise
    db.refresh(entry)
    logger.info(
        "Usage recorded: fabric_id=%s yards_used=%s yards_left=%s clamped=%s",
        fabric_id,
        body.yards_used,
        yards_left,
        clamped,
    )
    return entry, yards_left


def usage_history(
    db: Session, user_id: str, fabric_id: str | None = None
) -> list[UsageEntryOut]:
    """The user's usage entries, newest first, each with its fabric's name."""
    q = (
        db.query(UsageEntry, Fabric.name)
        .join(Fabric, UsageEntry.fabric_id == Fabric.id)
        .filter(UsageEntry.user_id == user_id)
    )
    if fabric_id is not None:
        q = q.filter(UsageEntry.fabric_id == fabric_id)
    rows = q.order_by(UsageEntry.usage_date.desc()).all()
    history = []
    for entry, fabric_name in rows:
        item = UsageEntryOut.model_validate(entry)
        item.fabric_name = fabric_name
        history.append(item)
    return history

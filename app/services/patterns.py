"""Owner-scoped CRUD and pinning for the pattern library."""

import logging

from sqlalchemy.orm import Session

from app.core.database import atomic
from app.core.errors import NotFoundError
from app.models import Pattern
from app.schemas.project import PatternCreate, PatternUpdate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "designer", "category", "difficulty", "size_range", "is_pinned")


def _owned_pattern(db: Session, pattern_id: str, user_id: str) -> Pattern:
    pattern = (
        db.query(Pattern)
        .filter(Pattern.id == pattern_id, Pattern.user_id == user_id)
        .first()
    )
    if pattern is None:
        raise NotFoundError("Pattern not found")
    return pattern


def list_patterns(db: Session, user_id: str) -> list[Pattern]:
    """Pinned patterns first, then alphabetical."""
    return (
        db.query(Pattern)
        .filter(Pattern.user_id == user_id)
        .order_by(Pattern.is_pinned.desc(), Pattern.name.asc())
        .all()
    )


def get_pattern(db: Session, pattern_id: str, user_id: str) -> Pattern:
    return _owned_pattern(db, pattern_id, user_id)


def create_pattern(db: Session, user_id: str, body: PatternCreate) -> Pattern:
    pattern = Pattern(user_id=user_id, **body.model_dump())
    with atomic(db):
        db.add(pattern)
    db.refresh(pattern)
    logger.info("Pattern created: pattern_id=%s user_id=%s", pattern.id, user_id)
    return pattern


def update_pattern(
    db: Session, pattern_id: str, user_id: str, body: PatternUpdate
) -> Pattern:
    pattern = _owned_pattern(db, pattern_id, user_id)
    changes = body.model_dump(exclude_unset=True)
    for field in REQUIRED_FIELDS:
        if field in changes and changes[field] is None:
            del changes[field]
    with atomic(db):
        for field, value in changes.items():
            setattr(pattern, field, value)
    db.refresh(pattern)
    return pattern


def delete_pattern(db: Session, pattern_id: str, user_id: str) -> None:
    pattern = _owned_pattern(db, pattern_id, user_id)
    with atomic(db):
        db.delete(pattern)
    logger.info("Pattern deleted: pattern_id=%s user_id=%s", pattern_id, user_id)


def toggle_pin(db: Session, pattern_id: str, user_id: str) -> bool:
    pattern = _owned_pattern(db, pattern_id, user_id)
    with atomic(db):
        pattern.is_pinned = not pattern.is_pinned
    return bool(pattern.is_pinned)

"""SQLAlchemy declarative Base and shared model configuration."""

import uuid
from datetime import UTC, datetime

from sqlalchemy.orm import DeclarativeBase


def utc_now() -> datetime:
    """Timezone-aware current time; used for Python-side column defaults."""
    return datetime.now(UTC)


def new_id() -> str:
    """Opaque primary key for every table (string ids, as the web client expects)."""
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass

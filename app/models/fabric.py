"""ORM models for fabrics in a user's stash and their usage history."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from app.models.base import Base, new_id, utc_now


class Fabric(Base):
    """
    One fabric in a user's stash.

    total_yards is the yardage still on hand; recording usage decrements it.
    """

    __tablename__ = "fabrics"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(255), nullable=False)
    type = Column(String(255), nullable=True)
    fiber_content = Column(String(255), nullable=True)
    weight = Column(String(64), nullable=True)
    color = Column(String(255), nullable=True)
    pattern = Column(String(255), nullable=True)
    width = Column(Float, nullable=True)
    total_yards = Column(Float, nullable=False)
    cost_per_yard = Column(Float, nullable=True)
    total_cost = Column(Float, nullable=True)
    source = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    image_url = Column(String(2048), nullable=True)
    is_pinned = Column(Boolean, nullable=False, default=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
        server_default=func.now(),
    )

    owner = relationship("User", back_populates="fabrics")
    usage_entries = relationship(
        "UsageEntry", back_populates="fabric", cascade="all, delete-orphan"
    )


class UsageEntry(Base):
    """Immutable record of yardage taken from a fabric (yards_used is what was requested)."""

    __tablename__ = "usage_history"

    id = Column(String(36), primary_key=True, default=new_id)
    fabric_id = Column(
        String(36),
        ForeignKey("fabrics.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    project_id = Column(
        String(36),
        ForeignKey("projects.id", ondelete="SET NULL"),
        nullable=True,
    )
    yards_used = Column(Float, nullable=False)
    project_name = Column(String(255), nullable=False)
    notes = Column(Text, nullable=True)
    usage_date = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )

    fabric = relationship("Fabric", back_populates="usage_entries")
    user = relationship("User", back_populates="usage_entries")

"""ORM model for the pattern library."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import relationship

from app.models.base import Base, new_id, utc_now


class Pattern(Base):
    """A sewing pattern in a user's library."""

    __tablename__ = "patterns"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(255), nullable=False)
    designer = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    pattern_number = Column(String(64), nullable=True)
    category = Column(String(32), nullable=False)
    difficulty = Column(String(32), nullable=False)
    size_range = Column(String(255), nullable=False, default="")
    fabric_requirements = Column(Text, nullable=True)
    notions = Column(Text, nullable=True)
    instructions = Column(Text, nullable=True)
    pdf_url = Column(String(2048), nullable=True)
    thumbnail_url = Column(String(2048), nullable=True)
    is_pinned = Column(Boolean, nullable=False, default=False)
    notes = Column(Text, nullable=True)
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

    owner = relationship("User", back_populates="patterns")

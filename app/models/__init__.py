"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.fabric import Fabric, UsageEntry
from app.models.pattern import Pattern
from app.models.project import Project
from app.models.user import User

__all__ = ["Base", "Fabric", "Pattern", "Project", "UsageEntry", "User"]

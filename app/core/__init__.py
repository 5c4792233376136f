"""Core app configuration, database and errors."""

from app.core.config import get_settings, settings
from app.core.database import atomic, get_db

__all__ = ["atomic", "get_settings", "settings", "get_db"]

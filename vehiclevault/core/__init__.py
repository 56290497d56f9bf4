"""Core app configuration, database, security and session handling."""

from vehiclevault.core.config import get_settings, settings
from vehiclevault.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]

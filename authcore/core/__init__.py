"""Core configuration, database wiring, password hashing and domain errors."""

from authcore.core.config import get_settings, settings
from authcore.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]

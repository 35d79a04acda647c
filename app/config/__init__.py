"""
==============================================================================
Configuration Package
==============================================================================

Centralized configuration management using Pydantic Settings.

Usage:
------
    from app.config import get_settings, Settings

    settings = get_settings()
    print(settings.database_url)
    print(settings.duplicate_match_mode)

==============================================================================
"""

from .settings import MATCH_MODES, Settings, get_settings

__all__ = [
    "MATCH_MODES",
    "Settings",
    "get_settings",
]

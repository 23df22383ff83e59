"""
Configuration package.

Exports the singleton settings instance for easy importing.

Usage:
    from ujr.config import settings

    print(settings.database_url)
"""

from ujr.config.settings import Settings, settings, get_settings, print_settings

__all__ = [
    "Settings",
    "settings",
    "get_settings",
    "print_settings",
]

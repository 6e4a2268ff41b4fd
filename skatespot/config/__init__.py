"""
Configuration package for the SkateSpot backend.
"""

from .settings import (
    Settings,
    Environment,
    LogLevel,
    StorageBackend,
    StorageSettings,
    CheckInSettings,
    ImageSettings,
    GeocodingSettings,
    SecuritySettings,
    settings,
    get_settings,
)

__all__ = [
    "Settings",
    "Environment",
    "LogLevel",
    "StorageBackend",
    "StorageSettings",
    "CheckInSettings",
    "ImageSettings",
    "GeocodingSettings",
    "SecuritySettings",
    "settings",
    "get_settings",
]

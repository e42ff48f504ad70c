"""Settings persistence components."""

from .settings import ServerSettings, SettingsManager, get_settings_manager

__all__ = [
    "ServerSettings",
    "SettingsManager",
    "get_settings_manager",
]

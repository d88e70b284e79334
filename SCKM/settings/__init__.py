from .settings import Channel, Settings, SettingsProvider
from .settings_store import SettingsStore

__all__ = [
    'Channel',
    'Settings',
    'SettingsProvider',
    'SettingsStore',
]

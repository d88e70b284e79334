"""
Settings Store Module - Persists settings as key/value preferences

Keys missing from the store fall back to the Settings defaults; values
that cannot be read are logged and replaced by their default.
"""
import logging
import sqlite3
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from SCKM.database.database import Database

from .settings import Channel, Settings

logger = logging.getLogger(__name__)

SETTINGS_SELECTED_CHANNEL = "SELECTED_CHANNEL"
SETTINGS_PATH_LIVE = "PATH_LIVE"
SETTINGS_PATH_PTU = "PATH_PTU"
SETTINGS_PATH_EPTU = "PATH_EPTU"
SETTINGS_PATH_HOTFIX = "PATH_HOTFIX"
SETTINGS_PATH_TECH_PREVIEW = "PATH_TECH_PREVIEW"
SETTINGS_PATH_CUSTOM = "PATH_CUSTOM"
SETTINGS_PLAYER_HANDLE = "PLAYER_HANDLE"
SETTINGS_SCAN_INTERVAL_SECONDS = "SCAN_INTERVAL_SECONDS"
SETTINGS_SHOW_ALL = "SHOW_ALL"

# Preference key -> Settings field
KEY_MAP = {
    SETTINGS_SELECTED_CHANNEL: "selected_channel",
    SETTINGS_PATH_LIVE: "path_live",
    SETTINGS_PATH_PTU: "path_ptu",
    SETTINGS_PATH_EPTU: "path_eptu",
    SETTINGS_PATH_HOTFIX: "path_hotfix",
    SETTINGS_PATH_TECH_PREVIEW: "path_tech_preview",
    SETTINGS_PATH_CUSTOM: "path_custom",
    SETTINGS_PLAYER_HANDLE: "handle",
    SETTINGS_SCAN_INTERVAL_SECONDS: "interval",
    SETTINGS_SHOW_ALL: "show_all",
}


def _to_text(value) -> str:
    if isinstance(value, Channel):
        return value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class SettingsStore:
    """Loads and saves Settings in the preference database"""

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = Path(db_path)

    def load(self) -> Settings:
        """
        Load settings, using defaults for anything missing or unreadable

        Returns:
            Settings snapshot
        """
        try:
            with Database(self.db_path) as db:
                stored = db.read_all()
        except sqlite3.Error as e:
            logger.error(f"Couldn't load preferences from {self.db_path}, using defaults: {e}")
            return Settings()

        defaults = Settings()
        values = {}
        for key, field_name in KEY_MAP.items():
            if key not in stored:
                continue
            try:
                # Validate one field at a time so a bad value only loses itself
                Settings.model_validate({field_name: stored[key]})
                values[field_name] = stored[key]
            except ValidationError:
                logger.warning(
                    f"Ignoring invalid preference {key}={stored[key]!r}, "
                    f"using default {getattr(defaults, field_name)!r}"
                )

        return Settings.model_validate(values)

    def save(self, settings: Settings) -> bool:
        """
        Persist every setting

        Returns:
            True if the preferences were written
        """
        try:
            with Database(self.db_path) as db:
                for key, field_name in KEY_MAP.items():
                    db.put(key, _to_text(getattr(settings, field_name)))
            logger.info("Settings saved")
            return True
        except sqlite3.Error as e:
            logger.error(f"Couldn't persist the preferences to {self.db_path}: {e}")
            return False

"""
Settings Module - Scan configuration and change notification

Handles:
- Release channel selection and per-channel log paths
- Validated, immutable settings snapshots
- Thread-safe access and listener notification
"""
import logging
import threading
from enum import Enum
from typing import Callable, List

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

INSTALL_ROOT = "C:\\Program Files\\Roberts Space Industries\\StarCitizen"
DEFAULT_INTERVAL_SECONDS = 60


def default_log_path(folder: str) -> str:
    return f"{INSTALL_ROOT}\\{folder}\\game.log"


class Channel(str, Enum):
    """Game build variants, each writing its own game.log"""
    LIVE = "LIVE"
    PTU = "PTU"
    EPTU = "EPTU"
    HOTFIX = "HOTFIX"
    TECH_PREVIEW = "TECH-PREVIEW"
    CUSTOM = "CUSTOM"

    @property
    def label(self) -> str:
        labels = {
            Channel.TECH_PREVIEW: "Tech Preview",
            Channel.CUSTOM: "Custom",
        }
        return labels.get(self, self.value)


class Settings(BaseModel):
    """Read-only snapshot of the scan configuration"""
    model_config = ConfigDict(frozen=True)

    selected_channel: Channel = Channel.LIVE
    path_live: str = default_log_path("LIVE")
    path_ptu: str = default_log_path("PTU")
    path_eptu: str = default_log_path("EPTU")
    path_hotfix: str = default_log_path("HOTFIX")
    path_tech_preview: str = default_log_path("TECH-PREVIEW")
    path_custom: str = ""
    handle: str = ""
    interval: int = Field(default=DEFAULT_INTERVAL_SECONDS, ge=1)
    show_all: bool = False

    def path_for(self, channel: Channel) -> str:
        paths = {
            Channel.LIVE: self.path_live,
            Channel.PTU: self.path_ptu,
            Channel.EPTU: self.path_eptu,
            Channel.HOTFIX: self.path_hotfix,
            Channel.TECH_PREVIEW: self.path_tech_preview,
            Channel.CUSTOM: self.path_custom,
        }
        return paths[channel]

    @property
    def resolved_log_path(self) -> str:
        """Log file path of the selected channel"""
        return self.path_for(self.selected_channel)


SettingsListener = Callable[[Settings], None]


class SettingsProvider:
    """
    Holds the current settings snapshot and notifies subscribers on change

    Snapshots are immutable, so readers on any thread can keep the object
    returned by `current` without further locking.
    """

    def __init__(self, settings: Settings = None):
        self._settings = settings if settings is not None else Settings()
        self._listeners: List[SettingsListener] = []
        self._lock = threading.Lock()

    @property
    def current(self) -> Settings:
        with self._lock:
            return self._settings

    def update(self, **changes) -> Settings:
        """
        Apply changes to the current settings

        Raises:
            pydantic.ValidationError: If a changed value is invalid
        """
        with self._lock:
            data = self._settings.model_dump()
            data.update(changes)
            new_settings = Settings.model_validate(data)
            self._settings = new_settings
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(new_settings)
            except Exception as e:
                logger.error(f"Settings listener failed: {e}", exc_info=True)

        return new_settings

    def subscribe(self, listener: SettingsListener) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def unsubscribe(self, listener: SettingsListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

import os
import shutil
import tempfile
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from SCKM.database.database import Database
from SCKM.settings import Channel, Settings, SettingsProvider, SettingsStore
from SCKM.settings.settings import default_log_path


@pytest.fixture
def temp_dir_manager(request):
    temp_dir = tempfile.mkdtemp(prefix="settings_test_")

    def cleanup_dir():
        if os.path.exists(temp_dir):
            shutil.rmtree(temp_dir)

    request.addfinalizer(cleanup_dir)
    return temp_dir


@pytest.fixture
def db_path(temp_dir_manager):
    return os.path.join(temp_dir_manager, "preferences.db")


class TestSettings:

    def test_defaults(self):
        settings = Settings()
        assert settings.selected_channel is Channel.LIVE
        assert settings.handle == ""
        assert settings.interval == 60
        assert settings.show_all is False
        assert settings.path_custom == ""
        assert settings.path_live == (
            "C:\\Program Files\\Roberts Space Industries\\StarCitizen\\LIVE\\game.log"
        )

    @pytest.mark.parametrize("channel,expected", [
        (Channel.LIVE, default_log_path("LIVE")),
        (Channel.PTU, default_log_path("PTU")),
        (Channel.EPTU, default_log_path("EPTU")),
        (Channel.HOTFIX, default_log_path("HOTFIX")),
        (Channel.TECH_PREVIEW, default_log_path("TECH-PREVIEW")),
        (Channel.CUSTOM, "/tmp/custom.log"),
    ])
    def test_resolved_log_path(self, channel, expected):
        settings = Settings(selected_channel=channel, path_custom="/tmp/custom.log")
        assert settings.resolved_log_path == expected

    def test_interval_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(interval=0)

    def test_frozen(self):
        with pytest.raises(ValidationError):
            Settings().handle = "Alice"


class TestSettingsProvider:

    def test_update_notifies_listener(self):
        provider = SettingsProvider()
        listener = MagicMock()
        provider.subscribe(listener)

        new_settings = provider.update(selected_channel=Channel.PTU)

        listener.assert_called_once_with(new_settings)
        assert provider.current.selected_channel is Channel.PTU

    def test_unsubscribed_listener_not_notified(self):
        provider = SettingsProvider()
        listener = MagicMock()
        provider.subscribe(listener)
        provider.unsubscribe(listener)

        provider.update(handle="Alice")

        listener.assert_not_called()

    def test_failing_listener_does_not_block_others(self):
        provider = SettingsProvider()
        broken = MagicMock(side_effect=RuntimeError("boom"))
        healthy = MagicMock()
        provider.subscribe(broken)
        provider.subscribe(healthy)

        provider.update(handle="Alice")

        healthy.assert_called_once()

    def test_invalid_update_keeps_current(self):
        provider = SettingsProvider(Settings(interval=5))
        listener = MagicMock()
        provider.subscribe(listener)

        with pytest.raises(ValidationError):
            provider.update(interval=0)

        assert provider.current.interval == 5
        listener.assert_not_called()

    def test_snapshots_are_independent(self):
        provider = SettingsProvider()
        before = provider.current
        provider.update(handle="Alice")
        assert before.handle == ""
        assert provider.current.handle == "Alice"


class TestSettingsStore:

    def test_empty_store_loads_defaults(self, db_path):
        assert SettingsStore(db_path).load() == Settings()

    def test_save_and_load(self, db_path):
        store = SettingsStore(db_path)
        settings = Settings(
            selected_channel=Channel.TECH_PREVIEW,
            path_ptu="D:\\SC\\PTU\\game.log",
            path_custom="/home/alice/game.log",
            handle="Alice",
            interval=15,
            show_all=True,
        )

        assert store.save(settings)
        assert store.load() == settings

    def test_ptu_path_loaded_from_its_own_key(self, db_path):
        with Database(db_path) as db:
            db.put("PATH_PTU", "ptu.log")
            db.put("PATH_EPTU", "eptu.log")

        settings = SettingsStore(db_path).load()

        assert settings.path_ptu == "ptu.log"
        assert settings.path_eptu == "eptu.log"

    def test_invalid_value_falls_back_to_default(self, db_path):
        with Database(db_path) as db:
            db.put("SCAN_INTERVAL_SECONDS", "often")
            db.put("SELECTED_CHANNEL", "NOT-A-CHANNEL")
            db.put("PLAYER_HANDLE", "Alice")

        settings = SettingsStore(db_path).load()

        assert settings.interval == 60
        assert settings.selected_channel is Channel.LIVE
        assert settings.handle == "Alice"

    def test_unusable_database_path(self, temp_dir_manager):
        store = SettingsStore(os.path.join(temp_dir_manager, "missing", "dir", "prefs.db"))

        assert store.load() == Settings()
        assert store.save(Settings(handle="Alice")) is False

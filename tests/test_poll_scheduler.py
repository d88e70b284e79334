import os
import queue
import shutil
import tempfile
import threading
import time
from unittest.mock import MagicMock

import pytest

from SCKM.errors import ConfigurationError
from SCKM.kill_log import (
    LogScanner,
    PollScheduler,
    ScanResult,
    ScanSession,
    ScanStatus,
    SchedulerState,
    SessionWriter,
)
from SCKM.settings import Channel, Settings, SettingsProvider


def kill_line(timestamp, killer="Bob"):
    return (
        f"<{timestamp}> [Notice] <Actor Death> CActor::Kill: 'Alice' [200] in zone 'Stanton' "
        f"killed by '{killer}' [300] using 'Arrowhead' [Class W_Rifle_01] "
        f"with damage type 'Bullet' from direction x: 0, y: 0, z: 0\n"
    )


@pytest.fixture
def temp_dir_manager(request):
    temp_dir = tempfile.mkdtemp(prefix="scheduler_test_")

    def cleanup_dir():
        if os.path.exists(temp_dir):
            shutil.rmtree(temp_dir)

    request.addfinalizer(cleanup_dir)
    return temp_dir


@pytest.fixture
def log_path(temp_dir_manager):
    path = os.path.join(temp_dir_manager, "game.log")
    with open(path, "w", encoding="utf-8") as f:
        f.write(kill_line("2025-06-14T19:30:41.000Z", killer="npc_turret"))
        f.write(kill_line("2025-06-14T19:30:42.000Z", killer="Bob"))
    return path


@pytest.fixture
def settings(log_path):
    return SettingsProvider(Settings(
        selected_channel=Channel.CUSTOM,
        path_custom=log_path,
        handle="Alice",
        interval=60,
    ))


@pytest.fixture
def scanner(settings, temp_dir_manager):
    return LogScanner(settings, SessionWriter(os.path.join(temp_dir_manager, "sessions")))


@pytest.fixture
def batches():
    return queue.Queue()


@pytest.fixture
def scheduler(settings, scanner, batches):
    scheduler = PollScheduler(settings, scanner, display_sink=batches.put)
    yield scheduler
    scheduler.stop()


class TestConfigurationValidation:

    def test_blank_handle_refused(self, settings, scheduler):
        settings.update(handle="  ")

        with pytest.raises(ConfigurationError) as exc_info:
            scheduler.start()

        assert exc_info.value.field == "handle"
        assert scheduler.state is SchedulerState.IDLE
        assert scheduler.worker_thread is None

    def test_blank_path_refused(self, settings, scheduler):
        settings.update(path_custom="")

        with pytest.raises(ConfigurationError) as exc_info:
            scheduler.start()

        assert exc_info.value.field == "path"
        assert not scheduler.is_running


class TestRunCycle:

    def test_pushes_filtered_events(self, scheduler, batches):
        scheduler.run_cycle(ScanSession())

        visible = batches.get_nowait()
        assert isinstance(visible, tuple)
        assert [e.killer for e in visible] == ["Bob"]
        assert len(scheduler.store) == 2

    def test_show_all_includes_environment_kills(self, settings, scheduler, batches):
        settings.update(show_all=True)
        scheduler.run_cycle(ScanSession())

        assert [e.killer for e in batches.get_nowait()] == ["Bob", "npc_turret"]

    def test_status_sink_receives_result(self, settings, scanner, batches):
        statuses = []
        scheduler = PollScheduler(settings, scanner, display_sink=batches.put, status_sink=statuses.append)

        scheduler.run_cycle(ScanSession())

        assert statuses[0].status is ScanStatus.OK
        assert statuses[0].new_events == 2

    def test_missing_file_still_displays(self, settings, scheduler, batches, temp_dir_manager):
        settings.update(path_custom=os.path.join(temp_dir_manager, "missing.log"))

        result = scheduler.run_cycle(ScanSession())

        assert result.status is ScanStatus.NOT_FOUND
        assert batches.get_nowait() == ()

    def test_no_display_after_stop_requested(self, scheduler, batches):
        scheduler.stop_event.set()
        scheduler.run_cycle(ScanSession())
        assert batches.empty()

    def test_sink_error_does_not_propagate(self, settings, scanner):
        sink = MagicMock(side_effect=RuntimeError("ui gone"))
        scheduler = PollScheduler(settings, scanner, display_sink=sink)

        scheduler.run_cycle(ScanSession())

        sink.assert_called_once()


class TestLifecycle:

    def test_start_scans_and_displays(self, scheduler, batches):
        assert scheduler.start()
        assert scheduler.is_running
        assert scheduler.session is not None

        visible = batches.get(timeout=5)
        assert [e.killer for e in visible] == ["Bob"]

    def test_second_start_is_noop(self, scheduler, batches):
        assert scheduler.start()
        assert not scheduler.start()

    def test_stop_interrupts_sleep(self, scheduler, batches):
        scheduler.start()
        batches.get(timeout=5)

        began = time.monotonic()
        scheduler.stop()
        elapsed = time.monotonic() - began

        assert elapsed < 2.0
        assert scheduler.state is SchedulerState.IDLE
        assert not scheduler.worker_thread.is_alive()

    def test_session_state_cleared_on_stop(self, scheduler, batches):
        scheduler.start()
        batches.get(timeout=5)
        scheduler.stop()

        assert len(scheduler.store) == 0
        assert scheduler.displayed == set()

    def test_restart_after_stop(self, scheduler, batches):
        scheduler.start()
        batches.get(timeout=5)
        scheduler.stop()

        assert scheduler.start()
        assert [e.killer for e in batches.get(timeout=5)] == ["Bob"]

    def test_stop_without_wait_reports_idle(self, settings, scanner, batches):
        stopped = queue.Queue()
        scheduler = PollScheduler(settings, scanner, display_sink=batches.put, stopped_sink=stopped.put)
        scheduler.start()
        batches.get(timeout=5)

        scheduler.stop(wait=False)

        assert stopped.get(timeout=5) is scheduler.session
        assert scheduler.state is SchedulerState.IDLE
        assert scheduler.start()
        scheduler.stop()

    def test_start_refused_until_cycle_finishes(self, settings, batches):
        entered = threading.Event()
        release = threading.Event()

        def slow_scan(path, session, store):
            entered.set()
            release.wait(5)
            return ScanResult(ScanStatus.OK)

        scanner = MagicMock()
        scanner.scan_once.side_effect = slow_scan
        stopped = queue.Queue()
        scheduler = PollScheduler(settings, scanner, display_sink=batches.put, stopped_sink=stopped.put)

        scheduler.start()
        assert entered.wait(5)
        scheduler.stop(wait=False)

        assert scheduler.state is SchedulerState.STOPPING
        assert not scheduler.start()

        release.set()
        stopped.get(timeout=5)
        assert scheduler.state is SchedulerState.IDLE
        assert batches.empty()

    def test_cycles_repeat_on_interval(self, settings, scheduler, batches, log_path):
        settings.update(interval=1)
        scheduler.start()
        batches.get(timeout=5)

        with open(log_path, "a", encoding="utf-8") as f:
            f.write(kill_line("2025-06-14T19:30:50.000Z", killer="Carol"))

        deadline = time.monotonic() + 5
        killers = []
        while time.monotonic() < deadline:
            killers = [e.killer for e in batches.get(timeout=5)]
            if "Carol" in killers:
                break

        assert killers == ["Carol", "Bob"]

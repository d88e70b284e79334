"""
Scan Monitor View Module - Main UI orchestration

Handles:
- Main view composition and layout
- Starting and stopping scan sessions
- Receiving kill event batches from the scan thread
- Keeping the status panel in sync with settings changes
"""
import logging
from pathlib import Path
from typing import Optional, Tuple

from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import Button, Label, Select

from SCKM.errors import ConfigurationError
from SCKM.kill_log import (
    KillEvent,
    LogScanner,
    PollScheduler,
    ScanResult,
    ScanSession,
    SchedulerState,
    SessionWriter,
)
from SCKM.settings import Channel, Settings, SettingsProvider, SettingsStore

from .components import ScanControlPanel, ScanStatusPanel
from .kill_list import KillEventList

logger = logging.getLogger(__name__)


class KillEventsUpdated(Message):
    """Visible events after a scan cycle (posted from the scan thread)"""

    def __init__(self, events: Tuple[KillEvent, ...], total: int):
        super().__init__()
        self.events = events
        self.total = total


class ScanCycleFinished(Message):
    """Outcome of a scan cycle (posted from the scan thread)"""

    def __init__(self, result: ScanResult):
        super().__init__()
        self.result = result


class ScanStopped(Message):
    """The scan thread has finished and the scheduler is idle again"""

    def __init__(self, session: ScanSession):
        super().__init__()
        self.session = session


class SettingsChanged(Message):
    def __init__(self, settings: Settings):
        super().__init__()
        self.settings = settings


class ScanMonitorView(Vertical):
    """
    Kill monitor view: controls and status on top, kill list below

    The scan itself runs on the scheduler's thread. Results only reach the
    widgets through posted messages, which Textual delivers on the UI loop
    in the order they were posted.
    """

    def __init__(self, settings: SettingsProvider, output_dir: Path,
                 settings_store: Optional[SettingsStore] = None, **kwargs):
        """
        Initialize the scan monitor

        Args:
            settings: Shared settings provider
            output_dir: Directory for session files
            settings_store: Store used to persist the channel selection
        """
        super().__init__(**kwargs)
        self.settings = settings
        self.settings_store = settings_store
        self.writer = SessionWriter(output_dir)
        self.scanner = LogScanner(settings, self.writer)
        self.scheduler = PollScheduler(
            settings,
            self.scanner,
            display_sink=self._post_events,
            status_sink=self._post_status,
            stopped_sink=self._post_stopped,
        )

    def compose(self) -> ComposeResult:
        """Compose the scan monitor layout"""
        with Horizontal(id="scan-controls"):
            yield ScanControlPanel(self.settings.current.selected_channel, id="scan-control-panel")

        with Horizontal(id="scan-content"):
            with Vertical(classes="main-panel", id="scan-main-panel"):
                yield Label("[bold]Kill Events[/bold]", classes="section-title")
                yield KillEventList(id="kill-event-list")

            with Vertical(classes="right-panel", id="scan-sidebar"):
                yield ScanStatusPanel(id="scan-status-panel")

    def on_mount(self) -> None:
        """Initialize when view is mounted"""
        self.query_one("#scan-status-panel", ScanStatusPanel).show_settings(self.settings.current)
        self.settings.subscribe(self._settings_listener)

    def on_unmount(self) -> None:
        """Clean up when view is unmounted"""
        self.settings.unsubscribe(self._settings_listener)
        self.scheduler.stop()

    # Called from the scan thread or settings listeners

    def _post_events(self, events: Tuple[KillEvent, ...]) -> None:
        self.post_message(KillEventsUpdated(events, len(self.scheduler.store)))

    def _post_status(self, result: ScanResult) -> None:
        self.post_message(ScanCycleFinished(result))

    def _post_stopped(self, session: ScanSession) -> None:
        self.post_message(ScanStopped(session))

    def _settings_listener(self, settings: Settings) -> None:
        self.post_message(SettingsChanged(settings))

    # Scan control

    def start_scan(self) -> bool:
        """
        Start scanning with the current settings

        Returns:
            True if a session was started
        """
        try:
            started = self.scheduler.start()
        except ConfigurationError as e:
            logger.error(f"{e} Check your input!")
            self.notify(f"{e} Check your input in the settings.", severity="error")
            return False

        if started:
            status = self.query_one("#scan-status-panel", ScanStatusPanel)
            status.session_file = self.writer.session_file(self.scheduler.session.file_stamp).name
            status.last_status = "Scanning..."
            self.query_one("#scan-control-panel", ScanControlPanel).set_running(True)
            self.notify("Scan started", severity="information")
        elif self.scheduler.state is SchedulerState.STOPPING:
            self.notify("Previous scan is still finishing, try again shortly", severity="warning")
        else:
            self.notify("A scan is already active", severity="warning")
        return started

    def stop_scan(self) -> None:
        """Stop the active scan session"""
        if not self.scheduler.is_running:
            return
        # Joining here would block the UI loop; ScanStopped re-enables Start
        self.scheduler.stop(wait=False)
        self.query_one("#scan-control-panel", ScanControlPanel).set_stopping()
        self.query_one("#scan-status-panel", ScanStatusPanel).last_status = "Stopping..."

    # Event Handlers

    @on(Button.Pressed, "#start-scan-btn")
    def handle_start(self) -> None:
        self.start_scan()

    @on(Button.Pressed, "#stop-scan-btn")
    async def handle_stop(self) -> None:
        self.stop_scan()
        await self.query_one("#kill-event-list", KillEventList).clear_events()

    @on(Select.Changed, "#channel-select")
    def handle_channel_changed(self, event: Select.Changed) -> None:
        """Persist a new channel selection"""
        channel = Channel(event.value)
        if channel is self.settings.current.selected_channel:
            return
        settings = self.settings.update(selected_channel=channel)
        if self.settings_store:
            self.settings_store.save(settings)

    @on(KillEventsUpdated)
    async def handle_kill_events(self, message: KillEventsUpdated) -> None:
        """Apply a batch of visible events (main thread)"""
        if not self.scheduler.is_running:
            return
        await self.query_one("#kill-event-list", KillEventList).show_events(message.events)
        status = self.query_one("#scan-status-panel", ScanStatusPanel)
        status.visible_kills = len(message.events)
        status.total_kills = message.total

    @on(ScanCycleFinished)
    def handle_cycle_finished(self, message: ScanCycleFinished) -> None:
        if not self.scheduler.is_running:
            return
        self.query_one("#scan-status-panel", ScanStatusPanel).show_result(message.result)

    @on(ScanStopped)
    def handle_scan_stopped(self, message: ScanStopped) -> None:
        """Worker thread finished (main thread)"""
        if self.scheduler.state is not SchedulerState.IDLE:
            return
        self.query_one("#scan-control-panel", ScanControlPanel).set_running(False)
        self.query_one("#scan-status-panel", ScanStatusPanel).show_result(None)
        self.notify(f"Scan session {message.session.file_stamp} stopped", severity="information")

    @on(SettingsChanged)
    def handle_settings_changed(self, message: SettingsChanged) -> None:
        self.query_one("#scan-status-panel", ScanStatusPanel).show_settings(message.settings)

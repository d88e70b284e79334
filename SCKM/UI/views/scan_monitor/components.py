"""
Scan Monitor Components Module - UI widgets and panels

Handles:
- Channel selection and start/stop controls
- Scan status panel
"""
from typing import Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.reactive import reactive
from textual.widgets import Button, Label, Select, Static

from SCKM.kill_log import ScanResult, ScanStatus
from SCKM.settings.settings import Channel, Settings


class ScanControlPanel(Horizontal):
    """Channel selector plus start/stop buttons"""

    def __init__(self, channel: Channel, **kwargs):
        super().__init__(**kwargs)
        self.channel = channel

    def compose(self) -> ComposeResult:
        """Compose the control panel"""
        yield Label("[bold]Channel:[/bold]", classes="control-label")
        yield Select(
            options=[(c.label, c.value) for c in Channel],
            value=self.channel.value,
            allow_blank=False,
            id="channel-select"
        )
        yield Button("▶ Start", id="start-scan-btn", variant="success")
        yield Button("■ Stop", id="stop-scan-btn", variant="error", disabled=True)

    def set_running(self, running: bool) -> None:
        """Toggle buttons for the current scan state"""
        self.query_one("#start-scan-btn", Button).disabled = running
        self.query_one("#stop-scan-btn", Button).disabled = not running
        self.query_one("#channel-select", Select).disabled = running

    def set_stopping(self) -> None:
        """Disable both buttons until the scan thread has finished"""
        self.query_one("#start-scan-btn", Button).disabled = True
        self.query_one("#stop-scan-btn", Button).disabled = True


class ScanStatusPanel(Vertical):
    """Current configuration and last cycle outcome"""

    handle: reactive[str] = reactive("")
    channel: reactive[str] = reactive("")
    log_path: reactive[str] = reactive("")
    session_file: reactive[str] = reactive("-")
    last_status: reactive[str] = reactive("Idle")
    total_kills: reactive[int] = reactive(0)
    visible_kills: reactive[int] = reactive(0)

    STATUS_STYLES = {
        ScanStatus.OK: "green",
        ScanStatus.NOT_FOUND: "yellow",
        ScanStatus.IO_ERROR: "red",
    }

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.status_style = ""

    def compose(self) -> ComposeResult:
        """Compose the status panel"""
        yield Label("[bold]Scan Status[/bold]", classes="panel-title")
        yield Static(self._format_status(), id="scan-status-content")

    def show_settings(self, settings: Settings) -> None:
        self.handle = settings.handle or "(not set)"
        self.channel = settings.selected_channel.label
        self.log_path = settings.resolved_log_path or "(not set)"

    def show_result(self, result: Optional[ScanResult]) -> None:
        if result is None:
            self.status_style = ""
            self.last_status = "Idle"
            return

        self.status_style = self.STATUS_STYLES[result.status]
        if result.status is ScanStatus.OK:
            self.last_status = f"OK ({result.new_events} new)"
        elif result.status is ScanStatus.NOT_FOUND:
            self.last_status = "Log file not found"
        else:
            self.last_status = f"Read error: {result.error}"

    def _format_status(self) -> Text:
        """Format status for display (plain Text, so paths are never read as markup)"""
        status = Text()
        status.append(f"Handle: {self.handle}\n")
        status.append(f"Channel: {self.channel}\n")
        status.append(f"Log File: {self.log_path}\n")
        status.append(f"Session File: {self.session_file}\n")
        status.append("Last Scan: ")
        status.append(self.last_status, style=self.status_style)
        status.append(f"\nKills: {self.visible_kills} shown / {self.total_kills} total")
        return status

    def watch_handle(self, value: str) -> None:
        self._update_display()

    def watch_channel(self, value: str) -> None:
        self._update_display()

    def watch_log_path(self, value: str) -> None:
        self._update_display()

    def watch_session_file(self, value: str) -> None:
        self._update_display()

    def watch_last_status(self, value: str) -> None:
        self._update_display()

    def watch_total_kills(self, value: int) -> None:
        self._update_display()

    def watch_visible_kills(self, value: int) -> None:
        self._update_display()

    def _update_display(self) -> None:
        """Update the status display"""
        if not self.is_mounted:
            return
        content = self.query_one("#scan-status-content", Static)
        content.update(self._format_status())

"""
Settings View - Edit and persist scan settings
"""
import logging
from typing import Optional

from pydantic import ValidationError
from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.widgets import Button, Checkbox, Input, Label

from SCKM.settings import Settings, SettingsProvider, SettingsStore

logger = logging.getLogger(__name__)

# Input id -> (label, Settings field)
PATH_FIELDS = {
    "path-live-input": ("LIVE log path", "path_live"),
    "path-ptu-input": ("PTU log path", "path_ptu"),
    "path-eptu-input": ("EPTU log path", "path_eptu"),
    "path-hotfix-input": ("HOTFIX log path", "path_hotfix"),
    "path-tech-preview-input": ("Tech Preview log path", "path_tech_preview"),
    "path-custom-input": ("Custom log path", "path_custom"),
}


class SettingsView(VerticalScroll):
    """Form for paths, handle, scan interval and display filter"""

    def __init__(self, settings: SettingsProvider,
                 settings_store: Optional[SettingsStore] = None, **kwargs):
        super().__init__(**kwargs)
        self.settings = settings
        self.settings_store = settings_store

    def compose(self) -> ComposeResult:
        """Compose the settings form"""
        current = self.settings.current
        yield Label("[bold]Settings[/bold]", classes="panel-title")

        for input_id, (label, field_name) in PATH_FIELDS.items():
            with Horizontal(classes="settings-row"):
                yield Label(label, classes="control-label")
                yield Input(value=getattr(current, field_name), id=input_id, classes="control-input")

        with Horizontal(classes="settings-row"):
            yield Label("Player handle", classes="control-label")
            yield Input(value=current.handle, placeholder="Your in-game handle", id="handle-input")

        with Horizontal(classes="settings-row"):
            yield Label("Scan interval (s)", classes="control-label")
            yield Input(value=str(current.interval), type="integer", id="interval-input")

        with Vertical(classes="settings-row"):
            yield Checkbox("Show NPC, environment and self kills", value=current.show_all,
                           id="show-all-checkbox")

        yield Button("Save", id="save-settings-btn", variant="primary")

    def collect_changes(self) -> dict:
        """
        Read the form into a dict of Settings fields

        Raises:
            ValueError: If the interval is not a whole number
        """
        changes = {
            field_name: self.query_one(f"#{input_id}", Input).value.strip()
            for input_id, (_, field_name) in PATH_FIELDS.items()
        }
        changes["handle"] = self.query_one("#handle-input", Input).value.strip()
        changes["interval"] = int(self.query_one("#interval-input", Input).value.strip())
        changes["show_all"] = self.query_one("#show-all-checkbox", Checkbox).value
        return changes

    def save(self) -> Optional[Settings]:
        """
        Validate, apply and persist the form

        Returns:
            The new settings, or None if the form was invalid
        """
        try:
            settings = self.settings.update(**self.collect_changes())
        except (ValueError, ValidationError) as e:
            logger.warning(f"Invalid settings input: {e}")
            self.notify("Scan interval must be a whole number of seconds (at least 1)", severity="error")
            return None

        if self.settings_store and not self.settings_store.save(settings):
            self.notify("Settings applied but could not be saved", severity="warning")
        else:
            self.notify("Settings saved", severity="information")
        return settings

    @on(Button.Pressed, "#save-settings-btn")
    def handle_save(self) -> None:
        self.save()

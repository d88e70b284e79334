"""
SCKM Main Application - Kill monitor UI using Textual
"""
from pathlib import Path
from typing import Optional

from textual.app import App, ComposeResult
from textual.widgets import Header, Footer, TabbedContent, TabPane

from SCKM import APP_TITLE, __version__
from SCKM.settings import SettingsProvider, SettingsStore
from SCKM.util import app_data_dir
from SCKM.UI.views import ScanMonitorView, SettingsView


class SCKMApp(App):
    """SC Kill Monitor - Terminal UI Application"""

    TITLE = APP_TITLE
    CSS_PATH = "sckm.tcss"

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("s", "switch_tab('scan')", "Scan"),
        ("c", "switch_tab('settings')", "Settings"),
        ("a", "about", "About"),
    ]

    def __init__(self, data_dir: Optional[Path] = None, **kwargs):
        super().__init__(**kwargs)
        self.data_dir = Path(data_dir) if data_dir else app_data_dir()
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.settings_store = SettingsStore(self.data_dir / "preferences.db")
        self.settings = SettingsProvider(self.settings_store.load())

    def compose(self) -> ComposeResult:
        """Compose the main UI layout"""
        yield Header(show_clock=True)

        with TabbedContent(initial="scan"):
            with TabPane("Scan", id="scan"):
                yield ScanMonitorView(
                    self.settings,
                    self.data_dir / "sessions",
                    settings_store=self.settings_store,
                    id="scan-monitor-view"
                )

            with TabPane("Settings", id="settings"):
                yield SettingsView(self.settings, self.settings_store, id="settings-view")

        yield Footer()

    def action_switch_tab(self, tab_id: str) -> None:
        """Switch to a specific tab"""
        tabbed_content = self.query_one(TabbedContent)
        tabbed_content.active = tab_id

    def action_about(self) -> None:
        self.notify(f"{APP_TITLE} {__version__}\nLicensed under the GNU GPL v3", title="About")


def run_app(data_dir: Optional[Path] = None) -> None:
    """Entry point to run the SCKM application"""
    app = SCKMApp(data_dir=data_dir)
    app.run()


if __name__ == "__main__":
    run_app()

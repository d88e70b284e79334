"""
Kill List Module - Scrollable list of kill event blocks
"""
from typing import Iterable, List

from rich.text import Text
from textual.containers import VerticalScroll
from textual.widgets import Static

from SCKM.kill_log import KillEvent


class KillEventList(VerticalScroll):
    """Renders each visible kill event as a six-line block, newest first"""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.events: List[KillEvent] = []

    async def show_events(self, events: Iterable[KillEvent]) -> None:
        """
        Replace the displayed blocks with the given events

        Args:
            events: Ordered events to display
        """
        self.events = list(events)
        await self.remove_children()
        if self.events:
            # Text renderables are not parsed as markup
            await self.mount_all(
                Static(Text(event.to_display_text()), classes="kill-event")
                for event in self.events
            )

    async def clear_events(self) -> None:
        self.events = []
        await self.remove_children()

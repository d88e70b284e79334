"""
Filter Policy Module - Decides which stored kill events reach the display
"""
from typing import Iterable, List, Set

from SCKM.settings.settings import Settings

from .kill_event import KillEvent

# Killer names containing any of these are NPCs, AI or the environment
NON_PLAYER_MARKERS = ("unknown", "aimodule", "pu_", "npc_", "kopion_")


class EventFilterPolicy:
    """Display filter for kill events"""

    def __init__(self, non_player_markers: Iterable[str] = NON_PLAYER_MARKERS):
        self.non_player_markers = tuple(m.lower() for m in non_player_markers)

    def is_environmental(self, event: KillEvent, settings: Settings) -> bool:
        """True for NPC/environment kills and self-kills"""
        killer = event.killer.lower()
        if any(marker in killer for marker in self.non_player_markers):
            return True
        return event.killer == settings.handle

    def should_display(self, event: KillEvent, settings: Settings,
                       already_displayed: Set[KillEvent]) -> bool:
        """
        Decide whether an event should be shown, recording it when accepted

        Args:
            event: Event from the store
            settings: Current settings snapshot
            already_displayed: Events shown so far this session (updated in place)

        Returns:
            True if the event is newly accepted for display
        """
        if event in already_displayed:
            return False

        if self.is_environmental(event, settings) and not settings.show_all:
            return False

        already_displayed.add(event)
        return True

    def visible_events(self, events: Iterable[KillEvent], settings: Settings,
                       already_displayed: Set[KillEvent]) -> List[KillEvent]:
        """
        Run the policy over an ordered snapshot

        Returns:
            Every displayed event, in snapshot order
        """
        events = list(events)
        for event in events:
            self.should_display(event, settings, already_displayed)
        return [event for event in events if event in already_displayed]

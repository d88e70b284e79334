"""
Event Store Module - Ordered, deduplicated kill events for one scan session
"""
from typing import Iterator, List, Set, Tuple

from .kill_event import KillEvent


class EventStore:
    """
    Newest-first collection of kill events

    Membership is tracked in a set next to the ordered list, so the
    duplicate check stays constant time while the session grows.
    """

    def __init__(self):
        self._events: List[KillEvent] = []
        self._seen: Set[KillEvent] = set()

    def add_first(self, event: KillEvent) -> bool:
        """
        Insert an event at the head unless an equal one is already stored

        Returns:
            True if the event was new
        """
        if event in self._seen:
            return False
        self._events.insert(0, event)
        self._seen.add(event)
        return True

    def sort_newest_first(self) -> None:
        """Stable sort by timestamp, descending"""
        self._events.sort(key=lambda e: e.timestamp, reverse=True)

    def snapshot(self) -> Tuple[KillEvent, ...]:
        return tuple(self._events)

    def clear(self) -> None:
        self._events.clear()
        self._seen.clear()

    def __contains__(self, event: object) -> bool:
        return event in self._seen

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[KillEvent]:
        return iter(list(self._events))

"""
Kill Log Package - Game log scanning and kill event extraction

This package provides the scan engine behind the kill monitor:
- Line parsing for <Actor Death> events
- Full-file rescans with deduplication
- Display filtering of NPC/environment kills
- Per-session output files
- Background polling with cancellable sleep

Package Structure:
- kill_event: Data model (KillEvent, ScanSession)
- kill_parser: Line parsing (KillEventParser)
- event_store: Session event collection (EventStore)
- log_scanner: One pass over the log (LogScanner, ScanResult, ScanStatus)
- filter_policy: Display filtering (EventFilterPolicy)
- session_writer: Session file output (SessionWriter)
- poll_scheduler: Background scan loop (PollScheduler, SchedulerState)
"""

from .kill_event import KillEvent, ScanSession
from .kill_parser import KillEventParser, EVENT_MARKER
from .event_store import EventStore
from .log_scanner import LogScanner, ScanResult, ScanStatus
from .filter_policy import EventFilterPolicy, NON_PLAYER_MARKERS
from .session_writer import SessionWriter
from .poll_scheduler import PollScheduler, SchedulerState, validate_settings

__all__ = [
    # Data models
    'KillEvent',
    'ScanSession',
    'EventStore',
    'ScanResult',
    'ScanStatus',

    # Core components
    'KillEventParser',
    'LogScanner',
    'EventFilterPolicy',
    'SessionWriter',
    'PollScheduler',
    'SchedulerState',
    'validate_settings',

    # Constants
    'EVENT_MARKER',
    'NON_PLAYER_MARKERS',
]

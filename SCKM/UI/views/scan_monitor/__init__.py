"""
Scan Monitor Package - Kill event scanning view

Package Structure:
- components: UI panels and controls (ScanControlPanel, ScanStatusPanel)
- kill_list: Kill event list widget (KillEventList)
- view: Main view orchestration (ScanMonitorView)
"""

from .view import (
    ScanMonitorView,
    KillEventsUpdated,
    ScanCycleFinished,
    ScanStopped,
    SettingsChanged,
)

from .components import ScanControlPanel, ScanStatusPanel
from .kill_list import KillEventList

__all__ = [
    # Main view
    'ScanMonitorView',

    # Messages
    'KillEventsUpdated',
    'ScanCycleFinished',
    'ScanStopped',
    'SettingsChanged',

    # UI components
    'ScanControlPanel',
    'ScanStatusPanel',
    'KillEventList',
]

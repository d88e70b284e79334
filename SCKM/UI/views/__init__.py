"""
SCKM UI Views Package
"""

from .scan_monitor import ScanMonitorView
from .settings_view import SettingsView

__all__ = [
    'ScanMonitorView',
    'SettingsView',
]

"""
SC Kill Monitor - Star Citizen game.log kill event monitor
"""

__version__ = "1.2.1"
APP_TITLE = "SC Kill Monitor"

"""
Error types raised by the kill monitor core.

Only ConfigurationError is ever surfaced to callers; everything else is
handled and logged where it happens.
"""


class SCKMError(Exception):
    pass


class ConfigurationError(SCKMError):
    """Raised when the scan cannot start because a setting is blank or invalid."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class KillEventParseError(SCKMError):
    """A single log line could not be turned into a KillEvent."""

"""
Kill Parser Module - Turns <Actor Death> log lines into KillEvents

Handles:
- Event marker recognition
- Strict ISO-8601 timestamp parsing (offset required)
- Field extraction with soft failure for missing tokens
- Whole-line failure reporting for malformed lines
"""
import logging
import re
from datetime import datetime
from typing import Optional

from SCKM.errors import KillEventParseError
from SCKM.util import extract_value

from .kill_event import KillEvent

logger = logging.getLogger(__name__)

EVENT_MARKER = "<Actor Death>"


class KillEventParser:
    """
    Parser for game.log kill lines

    Example line:
        <2025-06-14T19:30:45.123Z> [Notice] <Actor Death> CActor::Kill: 'Alice' [201]
        in zone 'Stanton' killed by 'Bob' [202] using 'Arrowhead' [Class W_Rifle_01]
        with damage type 'Bullet' from direction x: 0, y: 0, z: 0
    """

    # Extended format only: date, 'T', time, optional fraction, mandatory offset
    TIMESTAMP_PATTERN = re.compile(
        r'^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})'
        r'(?:\.(?P<fraction>\d{1,9}))?'
        r'(?P<offset>Z|[+-]\d{2}:\d{2})$'
    )

    # (field, start token, end token) in extraction order
    FIELD_TOKENS = (
        ('killed_player', "CActor::Kill: '", "'"),
        ('zone', "in zone '", "'"),
        ('killer', "killed by '", "'"),
        ('weapon', "using '", "'"),
        ('weapon_class', "[Class ", "]"),
        ('damage_type', "with damage type '", "'"),
    )

    def __init__(self, marker: str = EVENT_MARKER):
        self.marker = marker

    def is_candidate(self, line: str) -> bool:
        """Check whether a line carries the event marker"""
        return self.marker in line

    def parse_timestamp(self, timestamp_str: str) -> datetime:
        """
        Parse an ISO-8601 extended timestamp with explicit offset

        Raises:
            KillEventParseError: If the string is not in the expected format
        """
        match = self.TIMESTAMP_PATTERN.match(timestamp_str.strip())
        if not match:
            raise KillEventParseError(f"Malformed timestamp: {timestamp_str!r}")

        # Normalize to microseconds and a numeric offset for fromisoformat
        fraction = (match.group('fraction') or '').ljust(6, '0')[:6]
        offset = match.group('offset')
        if offset == 'Z':
            offset = '+00:00'

        try:
            return datetime.fromisoformat(f"{match.group('base')}.{fraction}{offset}")
        except ValueError as e:
            raise KillEventParseError(f"Invalid timestamp: {timestamp_str!r}") from e

    def parse_line(self, line: str) -> Optional[KillEvent]:
        """
        Parse a single kill line

        Args:
            line: Raw log line

        Returns:
            KillEvent, or None if the line could not be parsed
        """
        try:
            timestamp = self.parse_timestamp(extract_value(line, "<", ">"))
            fields = {
                name: extract_value(line, start, end)
                for name, start, end in self.FIELD_TOKENS
            }
            return KillEvent(timestamp=timestamp, **fields)
        except Exception as e:
            logger.error(f"Failed to parse log line: {line.rstrip()} ({e})")
            return None

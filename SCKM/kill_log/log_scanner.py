"""
Log Scanner Module - One full pass over the game log per poll cycle

Handles:
- Opening the log and streaming it line by line
- Marker gating, parsing, handle matching and deduplication
- Forwarding new events to the session writer
- Re-sorting the store newest-first after every pass
- Missing-file and read-error reporting

The whole file is read from the start on every cycle. A rotated or
truncated log is therefore picked up without any offset bookkeeping, and
the store's dedup keeps repeated passes from producing duplicates.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from SCKM.settings.settings import SettingsProvider

from .event_store import EventStore
from .kill_event import ScanSession
from .kill_parser import KillEventParser
from .session_writer import SessionWriter

logger = logging.getLogger(__name__)


class ScanStatus(Enum):
    """Outcome of a single scan pass"""
    OK = "ok"
    NOT_FOUND = "not_found"
    IO_ERROR = "io_error"


@dataclass(frozen=True)
class ScanResult:
    status: ScanStatus
    new_events: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is ScanStatus.OK


class LogScanner:
    """Extracts the configured player's kill events from a game log"""

    def __init__(self, settings: SettingsProvider, writer: SessionWriter,
                 parser: Optional[KillEventParser] = None):
        """
        Args:
            settings: Provider of the current settings snapshot
            writer: Persistence sink for newly found events
            parser: Line parser (defaults to the <Actor Death> parser)
        """
        self.settings = settings
        self.writer = writer
        self.parser = parser or KillEventParser()

    def scan_once(self, path: Union[str, Path], session: ScanSession,
                  store: EventStore) -> ScanResult:
        """
        Read the log once from start to end and collect new events

        Args:
            path: Log file to read
            session: Current scan session (names the output file)
            store: Session event store, updated in place

        Returns:
            ScanResult with the number of events added to the store
        """
        path = Path(path)
        handle = self.settings.current.handle
        new_events = 0

        try:
            with open(path, 'r', encoding='utf-8', errors='replace') as f:
                for line in f:
                    if not self.parser.is_candidate(line):
                        continue

                    event = self.parser.parse_line(line)
                    if event is None or event.killed_player != handle:
                        continue

                    if store.add_first(event):
                        new_events += 1
                        logger.info("New kill event detected")
                        logger.debug(f"Kill Event:\n{event}")
                        self.writer.write(event, session.file_stamp)

        except FileNotFoundError:
            logger.warning(f"Failed to find the specified log file: {path}")
            return ScanResult(ScanStatus.NOT_FOUND)
        except OSError as e:
            logger.error(f"Failed to read the log file: {path}: {e}", exc_info=True)
            return ScanResult(ScanStatus.IO_ERROR, new_events, str(e))
        finally:
            store.sort_newest_first()

        logger.debug(f"Finished extracting kill events from log file: {path}")
        return ScanResult(ScanStatus.OK, new_events)

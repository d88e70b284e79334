"""
Session Writer Module - Appends newly found kill events to the session file

Each scan session writes to exactly one file, named from the session start
time (KillEvents_yyMMdd-HHmmss.txt). Write failures are logged and never
interrupt scanning.
"""
import logging
from pathlib import Path

from .kill_event import KillEvent

logger = logging.getLogger(__name__)

SESSION_FILE_PREFIX = "KillEvents_"


class SessionWriter:
    """Persistence sink for kill events"""

    def __init__(self, output_dir: Path):
        """
        Args:
            output_dir: Directory receiving session files (created on demand)
        """
        self.output_dir = Path(output_dir)

    def session_file(self, file_stamp: str) -> Path:
        return self.output_dir / f"{SESSION_FILE_PREFIX}{file_stamp}.txt"

    def write(self, event: KillEvent, file_stamp: str) -> bool:
        """
        Append one event record to the session file

        Args:
            event: The newly detected event
            file_stamp: Session start time formatted as yyMMdd-HHmmss

        Returns:
            True if the record was written
        """
        target = self.session_file(file_stamp)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            with open(target, 'a', encoding='utf-8') as f:
                f.write(event.to_record_text())
            return True
        except OSError as e:
            logger.error(f"Failed to write kill event to {target}: {e}")
            return False

"""
Kill Event Module - Data model for parsed kill events

Handles:
- Immutable kill event record with structural equality
- Display block rendering (six-line format)
- Session file record rendering
- Scan session identity (start time and file stamp)
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone

DISPLAY_DATE_FORMAT = '%d.%m.%y %H:%M:%S'
SESSION_STAMP_FORMAT = '%y%m%d-%H%M%S'


@dataclass(frozen=True)
class KillEvent:
    """A single death of an actor, as reported by an <Actor Death> log line"""
    timestamp: datetime
    killed_player: str
    killer: str
    weapon: str
    weapon_class: str
    damage_type: str
    zone: str

    def _display_date(self) -> str:
        utc_time = self.timestamp.astimezone(timezone.utc)
        millis = utc_time.microsecond // 1000
        return f"{utc_time.strftime(DISPLAY_DATE_FORMAT)}:{millis:03d}"

    def to_display_text(self) -> str:
        """Render the fixed six-line block shown in the kill list"""
        return (
            f"Kill Date = {self._display_date()} UTC\n"
            f"Killed Player = {self.killed_player}\n"
            f"Zone = {self.zone}\n"
            f"Killer = {self.killer}\n"
            f"Used Method/Weapon = {self.weapon}\n"
            f"Damage Type = {self.damage_type}"
        )

    def to_record_text(self) -> str:
        """Render the record appended to the session file"""
        return (
            f"{self.to_display_text()}\n"
            f"Weapon Class = {self.weapon_class}\n"
            "\n"
        )

    def __str__(self) -> str:
        return self.to_display_text()


@dataclass(frozen=True)
class ScanSession:
    """One continuous run of the scan loop, from start to stop"""
    start_time: datetime = field(default_factory=lambda: datetime.now().astimezone())

    @property
    def file_stamp(self) -> str:
        """Start time as yyMMdd-HHmmss, used to name the session file"""
        return self.start_time.strftime(SESSION_STAMP_FORMAT)


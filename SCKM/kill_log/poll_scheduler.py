"""
Poll Scheduler Module - Background scan loop

Handles:
- Configuration validation before a session starts
- Single background thread running scan cycles back to back
- Pushing the filtered event list to the display sink after each cycle
- Cancellable sleep between cycles
- Session cleanup when the loop ends
"""
import logging
from enum import Enum
from threading import Event, Lock, Thread, current_thread
from typing import Callable, Optional, Set, Tuple

from SCKM.errors import ConfigurationError
from SCKM.settings.settings import Settings, SettingsProvider

from .event_store import EventStore
from .filter_policy import EventFilterPolicy
from .kill_event import KillEvent, ScanSession
from .log_scanner import LogScanner, ScanResult

logger = logging.getLogger(__name__)

DisplaySink = Callable[[Tuple[KillEvent, ...]], None]
StatusSink = Callable[[ScanResult], None]
StoppedSink = Callable[[ScanSession], None]


class SchedulerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPING = "stopping"


def validate_settings(settings: Settings) -> None:
    """
    Check that a scan can start with these settings

    Raises:
        ConfigurationError: If the log path or the handle is blank
    """
    if not settings.resolved_log_path.strip():
        raise ConfigurationError("path", "No log file path specified!")
    if not settings.handle.strip():
        raise ConfigurationError("handle", "No handle specified!")


class PollScheduler:
    """Drives LogScanner on a fixed interval in a background thread"""

    def __init__(self, settings: SettingsProvider, scanner: LogScanner,
                 display_sink: DisplaySink,
                 status_sink: Optional[StatusSink] = None,
                 policy: Optional[EventFilterPolicy] = None,
                 join_timeout: float = 2.0,
                 stopped_sink: Optional[StoppedSink] = None):
        """
        Initialize the scheduler

        Args:
            settings: Provider of the current settings snapshot
            scanner: Scanner used for every cycle
            display_sink: Receives the visible events after each cycle
            status_sink: Optionally receives each cycle's ScanResult
            policy: Display filter (defaults to EventFilterPolicy())
            join_timeout: Seconds stop() waits for the worker thread
            stopped_sink: Optionally told when the worker has gone back to IDLE
        """
        self.settings = settings
        self.scanner = scanner
        self.display_sink = display_sink
        self.status_sink = status_sink
        self.policy = policy or EventFilterPolicy()
        self.join_timeout = join_timeout
        self.stopped_sink = stopped_sink

        # Owned by the worker thread while a session runs
        self.store = EventStore()
        self.displayed: Set[KillEvent] = set()
        self.session: Optional[ScanSession] = None

        self.stop_event = Event()
        self.worker_thread: Optional[Thread] = None
        self._state = SchedulerState.IDLE
        self._state_lock = Lock()

    @property
    def state(self) -> SchedulerState:
        with self._state_lock:
            return self._state

    @property
    def is_running(self) -> bool:
        return self.state is SchedulerState.RUNNING

    def _set_state(self, state: SchedulerState) -> None:
        with self._state_lock:
            self._state = state

    def start(self) -> bool:
        """
        Start a new scan session

        Returns:
            True if a session was started, False if one is already active

        Raises:
            ConfigurationError: If the settings cannot be scanned with
        """
        with self._state_lock:
            if self._state is not SchedulerState.IDLE:
                return False
            settings = self.settings.current
            validate_settings(settings)

            self.stop_event.clear()
            self.session = ScanSession()
            self._state = SchedulerState.RUNNING

        logger.debug(f"Using the selected handle: {settings.handle}")
        logger.debug(f"Using the selected channel: {settings.selected_channel.value}")
        logger.debug(f"Using the selected log file path: {settings.resolved_log_path}")
        logger.info(f"Scan session {self.session.file_stamp} started")

        self.worker_thread = Thread(
            target=self._worker_loop,
            args=(self.session,),
            name="sckm-scan",
            daemon=True
        )
        self.worker_thread.start()
        return True

    def stop(self, wait: bool = True) -> None:
        """
        Stop the scan loop, interrupting the inter-cycle sleep

        Args:
            wait: Join the worker for up to join_timeout seconds. Callers on an
                event loop pass False and listen on stopped_sink instead.
        """
        with self._state_lock:
            if self._state is not SchedulerState.RUNNING:
                return
            self._state = SchedulerState.STOPPING

        self.stop_event.set()
        if wait and self.worker_thread and self.worker_thread is not current_thread():
            self.worker_thread.join(timeout=self.join_timeout)
            if self.worker_thread.is_alive():
                logger.warning("Scan thread still finishing its current cycle")

    def run_cycle(self, session: ScanSession) -> ScanResult:
        """Scan once and push results to the sinks"""
        settings = self.settings.current
        result = self.scanner.scan_once(settings.resolved_log_path, session, self.store)

        if self.stop_event.is_set():
            return result

        visible = tuple(self.policy.visible_events(self.store.snapshot(), settings, self.displayed))
        self._notify(self.display_sink, visible)
        if self.status_sink:
            self._notify(self.status_sink, result)
        return result

    def _notify(self, sink: Callable, payload) -> None:
        try:
            sink(payload)
        except Exception as e:
            logger.error(f"Scan sink failed: {e}", exc_info=True)

    def _worker_loop(self, session: ScanSession) -> None:
        """Main worker loop - runs in background thread"""
        try:
            while not self.stop_event.is_set():
                try:
                    self.run_cycle(session)
                except Exception as e:
                    # Keep the session alive; next cycle retries
                    logger.error(f"Unexpected error during scan cycle: {e}", exc_info=True)

                interval = self.settings.current.interval
                if self.stop_event.wait(interval):
                    break
        finally:
            logger.debug("Scan thread was stopped. Terminating...")
            self.store.clear()
            self.displayed.clear()
            self._set_state(SchedulerState.IDLE)
            logger.info(f"Scan session {session.file_stamp} ended")
            if self.stopped_sink:
                self._notify(self.stopped_sink, session)

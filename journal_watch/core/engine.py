"""Live tail engine.

The engine replays the last few records of a log source and then follows
it: it blocks on the source's change notifications, drains every newly
appended record on each wakeup and survives invalidation of the source
(rotation, vacuum, truncation) by re-opening it and resuming from the last
position it saw.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, TextIO

from ..io.logger import get_logger
from ..sources.base import LogSource, MonotonicPosition, SourceEvent, SourceOpener
from ..ui.render import RecordRenderer
from .exceptions import DescriptorError, LogSourceError, ProcessError, SeekError
from .readiness import ReadinessWaiter

logger = get_logger("engine")

DEFAULT_HISTORY = 20
DEFAULT_FALLBACK_TIMEOUT = 1.0


class EngineState(str, Enum):
    """Where the engine is in its lifecycle."""

    SEEKING = "seeking"
    DRAINING = "draining"
    REOPENING = "reopening"


class InvalidationStrategy(str, Enum):
    """What to do when the source reports invalidation.

    REOPEN closes the handle and re-opens the source, resuming from the
    last seen record. DRAIN keeps reading the existing handle as if records
    had been appended; cheaper, but the handle may point at files that were
    already removed.
    """

    REOPEN = "reopen"
    DRAIN = "drain"


@dataclass
class EngineSettings:
    """Tunables for the tail engine."""

    history: int = DEFAULT_HISTORY
    on_invalidate: InvalidationStrategy = InvalidationStrategy.REOPEN
    fallback_timeout: float = DEFAULT_FALLBACK_TIMEOUT


class TailEngine:
    """Follows a log source and writes rendered records to a stream.

    The engine exclusively owns the source handle it is given; on
    invalidation the handle is closed and replaced by a fresh one from
    ``opener``.
    """

    def __init__(
        self,
        source: LogSource,
        opener: SourceOpener,
        renderer: RecordRenderer,
        output: TextIO,
        waiter: ReadinessWaiter,
        settings: Optional[EngineSettings] = None,
    ):
        self.source: Optional[LogSource] = source
        self.opener = opener
        self.renderer = renderer
        self.output = output
        self.waiter = waiter
        self.settings = settings or EngineSettings()
        self.state = EngineState.SEEKING
        self._fd: Optional[int] = None
        self._running = False

    def run(self) -> int:
        """Replay history, then follow the source until ``stop()`` is called.

        Returns:
            0 when the loop ends on its own

        Raises:
            SeekError: Initial positioning failed
            TailLoopError: Waiting on the source cannot continue
            SourceOpenError: Re-opening after invalidation failed
        """
        self._running = True
        self.start()

        while self._running:
            self.run_once()
        return 0

    def start(self) -> None:
        """Replay history and register the source for change notifications."""
        self.replay_history()
        self._attach()

    def stop(self) -> None:
        """Make ``run()`` return after the current wait cycle."""
        self._running = False

    def replay_history(self) -> int:
        """Print the last ``history`` records, oldest first.

        Returns:
            Number of records replayed
        """
        self.state = EngineState.SEEKING
        self.source.seek_tail()

        steps = 0
        for _ in range(self.settings.history):
            # Running out of records before the history count is not an error
            if not self.source.previous():
                break
            steps += 1

        for i in range(steps):
            if i and not self.source.next():
                break
            self._emit()

        self.state = EngineState.DRAINING
        return steps

    def run_once(self) -> None:
        """Wait for one notification and act on it."""
        self.waiter.wait(self._wait_timeout())

        # Processing after a timeout is harmless and lets sources that
        # cannot signal every change catch up.
        try:
            raw_event = self.source.process()
        except LogSourceError as e:
            raise ProcessError(str(e), errno=e.errno) from e

        try:
            event = SourceEvent(raw_event)
        except ValueError:
            logger.warning(f"Unhandled journal event type {raw_event}")
            return

        if event is SourceEvent.NOP:
            return
        if event is SourceEvent.APPEND:
            self.drain()
        elif self.settings.on_invalidate is InvalidationStrategy.DRAIN:
            logger.info("Log object invalidated, continuing on current handle")
            self.drain()
        else:
            self.reopen()
            self.drain()

    def drain(self) -> int:
        """Render every record after the cursor.

        Returns:
            Number of records rendered
        """
        count = 0
        while self.source.next():
            self._emit()
            count += 1
        return count

    def reopen(self) -> None:
        """Replace an invalidated source handle with a freshly opened one."""
        self.state = EngineState.REOPENING
        logger.warning("Log object invalidated, re-opening")

        stale = self.source
        self._detach()
        position = self._capture_position(stale)
        stale.close()
        self.source = None

        fresh = self.opener()
        self.source = fresh

        if position is not None:
            try:
                fresh.seek_monotonic(position)
            except SeekError as e:
                logger.error(f"Failed to seek to last seen entry ({e})")
                fresh.seek_tail()
        else:
            fresh.seek_tail()

        self._attach()
        self.state = EngineState.DRAINING

    def close(self) -> None:
        """Deregister and close the current source handle."""
        self._detach()
        if self.source is not None:
            self.source.close()
            self.source = None

    def _capture_position(self, source: LogSource) -> Optional[MonotonicPosition]:
        try:
            source.previous()
            return source.get_monotonic_usec()
        except LogSourceError as e:
            logger.error(
                f"Failed to obtain monotonic timestamp for current journal entry ({e})"
            )
            return None

    def _attach(self) -> None:
        try:
            fd = self.source.fileno()
            events = self.source.get_events()
        except LogSourceError as e:
            raise DescriptorError(str(e), errno=e.errno) from e
        self.waiter.register(fd, events)
        self._fd = fd

    def _detach(self) -> None:
        if self._fd is not None:
            self.waiter.deregister(self._fd)
            self._fd = None

    def _wait_timeout(self) -> Optional[float]:
        try:
            return self.source.get_timeout()
        except LogSourceError as e:
            logger.debug(f"Source timeout unavailable, polling: {e}")
            return self.settings.fallback_timeout

    def _emit(self) -> None:
        line = self.renderer.render(self.source)
        if line is None:
            return
        self.output.write(line)
        self.output.flush()

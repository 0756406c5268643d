"""systemd journal implementation of the log source interface."""

import errno
import uuid
from typing import Optional

from systemd import journal

from ..core.exceptions import (
    FieldAbsentError,
    LogSourceError,
    SeekError,
    SourceBusyError,
    SourceOpenError,
)
from .base import LogSource, MonotonicPosition

# Local journal files only, as with plain `journalctl -f`
DEFAULT_FLAGS = journal.LOCAL_ONLY


class JournalSource(LogSource):
    """Log source backed by a ``systemd.journal._Reader``.

    The low-level reader is used so timestamps stay in microseconds and
    field values come back as raw bytes.
    """

    def __init__(self, reader):
        self._reader = reader

    @classmethod
    def open(cls, flags: int = DEFAULT_FLAGS) -> "JournalSource":
        """Open the journal.

        Raises:
            SourceOpenError: If the journal cannot be opened
        """
        try:
            reader = journal._Reader(flags)
        except OSError as e:
            raise SourceOpenError(
                f"Failed to open system journal ({e.strerror or e})", errno=e.errno
            ) from e
        return cls(reader)

    def close(self) -> None:
        self._reader.close()

    def seek_tail(self) -> None:
        try:
            self._reader.seek_tail()
        except OSError as e:
            raise SeekError(
                f"Failed to seek to the end of system journal ({e.strerror or e})",
                errno=e.errno,
            ) from e

    def previous(self) -> bool:
        try:
            return bool(self._reader._previous())
        except OSError as e:
            raise SeekError(
                f"Failed to move backwards in journal ({e.strerror or e})",
                errno=e.errno,
            ) from e

    def next(self) -> bool:
        try:
            return bool(self._reader._next())
        except OSError as e:
            raise SeekError(
                f"Failed to move forward in journal ({e.strerror or e})",
                errno=e.errno,
            ) from e

    def get_data(self, name: str) -> bytes:
        try:
            value = self._reader._get(name)
        except KeyError as e:
            raise FieldAbsentError(name) from e
        except OSError as e:
            if e.errno == errno.EAGAIN:
                raise SourceBusyError(name) from e
            raise LogSourceError(e.strerror or str(e), errno=e.errno) from e
        # The reader strips the framing; restore it so consumers see the
        # same payload sd_journal_get_data() hands out.
        return name.encode("ascii") + b"=" + value

    def get_realtime_usec(self) -> int:
        try:
            return int(self._reader._get_realtime())
        except OSError as e:
            raise LogSourceError(
                f"Failed to obtain realtime timestamp ({e.strerror or e})",
                errno=e.errno,
            ) from e

    def get_monotonic_usec(self) -> MonotonicPosition:
        try:
            usec, boot_id = self._reader._get_monotonic()
        except OSError as e:
            raise LogSourceError(
                f"Failed to obtain monotonic timestamp ({e.strerror or e})",
                errno=e.errno,
            ) from e
        if isinstance(boot_id, bytes):
            boot_id = uuid.UUID(bytes=boot_id).hex
        elif isinstance(boot_id, uuid.UUID):
            boot_id = boot_id.hex
        return MonotonicPosition(usec=int(usec), boot_id=str(boot_id))

    def seek_monotonic(self, position: MonotonicPosition) -> None:
        try:
            # _Reader takes microseconds and a hex boot id
            self._reader.seek_monotonic(position.usec, position.boot_id)
        except (OSError, ValueError) as e:
            raise SeekError(f"Failed to seek to last seen entry ({e})") from e

    def process(self) -> int:
        try:
            return int(self._reader.process())
        except OSError as e:
            raise LogSourceError(
                f"Failed to process system journal event ({e.strerror or e})",
                errno=e.errno,
            ) from e

    def fileno(self) -> int:
        try:
            return self._reader.fileno()
        except OSError as e:
            raise LogSourceError(
                f"Failed to obtain system journal file descriptor ({e.strerror or e})",
                errno=e.errno,
            ) from e

    def get_events(self) -> int:
        try:
            return int(self._reader.get_events())
        except OSError as e:
            raise LogSourceError(
                f"Failed to obtain journal poll events ({e.strerror or e})",
                errno=e.errno,
            ) from e

    def get_timeout(self) -> Optional[float]:
        try:
            timeout_ms = self._reader.get_timeout_ms()
        except OSError as e:
            raise LogSourceError(
                f"Failed to obtain journal timeout ({e.strerror or e})",
                errno=e.errno,
            ) from e
        if timeout_ms is None or timeout_ms < 0:
            return None
        return timeout_ms / 1000.0


def open_journal() -> LogSource:
    """Opener for the default local journal selector."""
    return JournalSource.open()

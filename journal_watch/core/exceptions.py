"""Custom exceptions for journal-watch core functionality."""

from typing import Optional


class JournalWatchError(Exception):
    """Base exception for all journal-watch errors."""


class LogSourceError(JournalWatchError):
    """Raised when the log source reports a failure."""

    def __init__(self, message: str, errno: Optional[int] = None):
        self.errno = errno
        super().__init__(message)


class FieldAbsentError(LogSourceError):
    """Raised when a field is not present on the current record."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Field {field} not present on current record")


class SourceBusyError(LogSourceError):
    """Raised when the source asks the caller to try again."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Field {field} temporarily unavailable")


class SourceOpenError(LogSourceError):
    """Raised when the log source cannot be opened at all."""


class SeekError(LogSourceError):
    """Raised when the cursor cannot be positioned."""


class TailLoopError(JournalWatchError):
    """Base exception for failures that stop the tail loop."""

    def __init__(self, message: str, errno: Optional[int] = None):
        self.errno = errno
        super().__init__(message)


class DescriptorError(TailLoopError):
    """Raised when the source cannot provide a wait descriptor."""


class RegistrationError(TailLoopError):
    """Raised when a descriptor cannot be registered for readiness."""


class WaitError(TailLoopError):
    """Raised when waiting for readiness fails for a reason other than a signal."""


class ProcessError(TailLoopError):
    """Raised when the source fails to classify a pending notification."""

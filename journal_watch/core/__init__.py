"""Core components: extraction, identity resolution, waiting and the tail engine.

The engine itself lives in ``journal_watch.core.engine``; it depends on the
renderer, which in turn depends on the modules exported here.
"""

from .exceptions import (
    DescriptorError,
    FieldAbsentError,
    JournalWatchError,
    LogSourceError,
    ProcessError,
    RegistrationError,
    SeekError,
    SourceBusyError,
    SourceOpenError,
    TailLoopError,
    WaitError,
)
from .extractor import FieldExtractor
from .identity import IdentityResolver
from .readiness import ReadinessWaiter
from .retry import FetchResult, FetchStatus, retry

__all__ = [
    "DescriptorError",
    "FetchResult",
    "FetchStatus",
    "FieldAbsentError",
    "FieldExtractor",
    "IdentityResolver",
    "JournalWatchError",
    "LogSourceError",
    "ProcessError",
    "ReadinessWaiter",
    "RegistrationError",
    "SeekError",
    "SourceBusyError",
    "SourceOpenError",
    "TailLoopError",
    "WaitError",
    "retry",
]

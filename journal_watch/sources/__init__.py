"""Log source interface and implementations.

The systemd adapter lives in ``journal_watch.sources.journal`` and is
imported on demand since it needs the optional ``systemd-python`` package.
"""

from .base import LogSource, MonotonicPosition, SourceEvent, SourceOpener

__all__ = [
    "LogSource",
    "MonotonicPosition",
    "SourceEvent",
    "SourceOpener",
]

"""Log source interface used by the tail engine.

The tail engine never talks to a concrete log store. It drives an open
``LogSource`` handle: a cursor over an append-only, ordered sequence of
records that can be stepped forward and backward, re-positioned
absolutely, and watched for change notifications through a pollable
descriptor.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional


class SourceEvent(IntEnum):
    """Classification of a pending change notification."""

    NOP = 0
    APPEND = 1
    INVALIDATE = 2


@dataclass(frozen=True)
class MonotonicPosition:
    """Position of a record expressed as a monotonic offset within a boot.

    Attributes:
        usec: Monotonic clock value in microseconds
        boot_id: Identifier of the boot the monotonic clock belongs to
    """

    usec: int
    boot_id: str


class LogSource(ABC):
    """Abstract handle to an open, append-only log source.

    A handle is exclusively owned by one tail engine. Field data returned
    by ``get_data`` is only valid until the cursor moves.
    """

    @abstractmethod
    def close(self) -> None:
        """Release the handle and its descriptor."""

    @abstractmethod
    def seek_tail(self) -> None:
        """Position the cursor after the last record.

        Raises:
            SeekError: If the cursor cannot be positioned
        """

    @abstractmethod
    def previous(self) -> bool:
        """Step the cursor one record back.

        Returns:
            False when already at the first record (no movement)

        Raises:
            SeekError: If the source fails to move
        """

    @abstractmethod
    def next(self) -> bool:
        """Step the cursor one record forward.

        Returns:
            False when no further record is available (no movement)
        """

    @abstractmethod
    def get_data(self, name: str) -> bytes:
        """Read one field of the current record.

        The payload is framed as ``NAME=value``; its length is explicit and
        there is no terminator.

        Raises:
            FieldAbsentError: The record has no such field
            SourceBusyError: Data not materialized yet, try again
            LogSourceError: Any other failure
        """

    @abstractmethod
    def get_realtime_usec(self) -> int:
        """Wall-clock timestamp of the current record in microseconds."""

    @abstractmethod
    def get_monotonic_usec(self) -> MonotonicPosition:
        """Monotonic timestamp and boot id of the current record."""

    @abstractmethod
    def seek_monotonic(self, position: MonotonicPosition) -> None:
        """Position the cursor at a captured monotonic position.

        Raises:
            SeekError: If the position cannot be sought
        """

    @abstractmethod
    def process(self) -> int:
        """Classify the pending change notification.

        Returns:
            A raw classification; known values are ``SourceEvent`` members

        Raises:
            LogSourceError: If the notification cannot be processed
        """

    @abstractmethod
    def fileno(self) -> int:
        """Descriptor to wait on for change notifications."""

    @abstractmethod
    def get_events(self) -> int:
        """Poll event mask to register the descriptor with."""

    @abstractmethod
    def get_timeout(self) -> Optional[float]:
        """Seconds the caller may wait before processing anyway.

        Returns:
            None for an indefinite wait
        """


# Zero-argument callable opening a fresh handle against the same selector
SourceOpener = Callable[[], LogSource]

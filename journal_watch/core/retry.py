"""Bounded retry for transient log source conditions."""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, TypeVar

from .exceptions import FieldAbsentError, LogSourceError, SourceBusyError

T = TypeVar("T")


class FetchStatus(str, Enum):
    """Outcome of a bounded fetch."""

    OK = "ok"
    TIMED_OUT = "timed_out"
    ABSENT = "absent"
    ERROR = "error"


@dataclass(frozen=True)
class FetchResult:
    """Tagged result of a bounded fetch.

    Attributes:
        status: Which way the fetch ended
        value: The fetched value, only meaningful when status is OK
        reason: Underlying failure description for ERROR
        attempts: Number of times the operation was called
    """

    status: FetchStatus
    value: Optional[bytes] = None
    reason: Optional[str] = None
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return self.status is FetchStatus.OK


def retry(attempts: int, op: Callable[[], bytes]) -> FetchResult:
    """Call ``op`` until it succeeds or the attempt budget is spent.

    A busy source costs one attempt and is retried immediately. An absent
    field or any other source failure ends the loop straight away.

    Args:
        attempts: Maximum number of calls to ``op``
        op: Zero-argument callable performing one fetch

    Returns:
        FetchResult describing the outcome

    Raises:
        ValueError: If attempts is less than 1
    """
    if attempts < 1:
        raise ValueError(f"attempts must be at least 1, got {attempts}")

    for attempt in range(1, attempts + 1):
        try:
            value = op()
        except SourceBusyError:
            continue
        except FieldAbsentError:
            return FetchResult(FetchStatus.ABSENT, attempts=attempt)
        except LogSourceError as e:
            return FetchResult(FetchStatus.ERROR, reason=str(e), attempts=attempt)
        return FetchResult(FetchStatus.OK, value=value, attempts=attempt)

    return FetchResult(FetchStatus.TIMED_OUT, attempts=attempts)

"""Field extraction from the current record of a log source."""

import re

from ..io.logger import get_logger
from ..sources.base import LogSource
from .retry import FetchResult, FetchStatus, retry

logger = get_logger("extractor")

DEFAULT_MAX_ATTEMPTS = 10

FIELD_NAME_PATTERN = re.compile(r"[A-Z0-9_]+")


class FieldExtractor:
    """Reads single named fields, absorbing every per-field failure.

    Callers only ever see a (possibly empty) value. Timeouts and source
    errors are reported on the diagnostic channel.
    """

    def __init__(self, max_attempts: int = DEFAULT_MAX_ATTEMPTS):
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        self.max_attempts = max_attempts

    def fetch_result(self, source: LogSource, field: str) -> FetchResult:
        """Fetch a field and return the tagged outcome, value unframed."""
        if not field or not FIELD_NAME_PATTERN.fullmatch(field):
            raise ValueError(f"Invalid field name: {field!r}")

        result = retry(self.max_attempts, lambda: source.get_data(field))
        if not result.ok:
            return result

        # Payload is NAME=value
        prefix_length = len(field) + 1
        return FetchResult(
            FetchStatus.OK, value=result.value[prefix_length:], attempts=result.attempts
        )

    def fetch(self, source: LogSource, field: str) -> bytes:
        """Fetch a field of the current record.

        Args:
            source: Open log source positioned on a record
            field: Field name (uppercase, digits, underscore)

        Returns:
            The field value, or b"" when absent, timed out or failed
        """
        result = self.fetch_result(source, field)

        if result.status is FetchStatus.OK:
            return result.value
        if result.status is FetchStatus.TIMED_OUT:
            logger.warning(f"Timeout fetching field {field}")
        elif result.status is FetchStatus.ERROR:
            logger.error(f"Failed to fetch field {field} ({result.reason})")
        else:
            logger.debug(f"Field {field} absent")
        return b""

    def fetch_text(self, source: LogSource, field: str) -> str:
        """Fetch a field decoded as UTF-8.

        Undecodable bytes are kept as surrogate escapes so the value can be
        written back out byte for byte.
        """
        return self.fetch(source, field).decode("utf-8", errors="surrogateescape")

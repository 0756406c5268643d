"""Rendering of log records into colored terminal lines."""

from datetime import datetime
from typing import Optional

from ..core.exceptions import LogSourceError
from ..core.extractor import FieldExtractor
from ..core.identity import IdentityResolver
from ..io.logger import get_logger
from ..sources.base import LogSource
from .constants import (
    DIM,
    FIELD_AUDIT_LOGINUID,
    FIELD_COMM,
    FIELD_HOSTNAME,
    FIELD_MESSAGE,
    FIELD_PID,
    FIELD_PRIORITY,
    FIELD_SYSLOG_IDENTIFIER,
    FIELD_UID,
    RESET,
    SEVERITY_COLORS,
    TIMESTAMP_FORMAT,
    Severity,
)

logger = get_logger("render")


class RecordRenderer:
    """Builds one output line from the record under the cursor.

    Line layout::

        <dim>HH:MM:SS Mon DD host[:user] ident[[pid]]: <severity>message<reset>

    The identity segment is dropped when neither ``_UID`` nor
    ``_AUDIT_LOGINUID`` is set, the pid segment when ``_PID`` is empty.
    The message is passed through verbatim.
    """

    def __init__(
        self,
        extractor: Optional[FieldExtractor] = None,
        resolver: Optional[IdentityResolver] = None,
    ):
        self.extractor = extractor or FieldExtractor()
        self.resolver = resolver or IdentityResolver()

    def _field(self, source: LogSource, name: str) -> str:
        return self.extractor.fetch_text(source, name)

    def format_timestamp(self, usec: int) -> str:
        """Format a realtime microsecond timestamp in local time."""
        return datetime.fromtimestamp(usec // 1_000_000).strftime(TIMESTAMP_FORMAT)

    def severity_color(self, source: LogSource) -> str:
        severity = Severity.parse(self._field(source, FIELD_PRIORITY))
        return SEVERITY_COLORS[severity]

    def identity(self, source: LogSource) -> str:
        """Resolved user for the record, or "" when the record has none."""
        uid = self._field(source, FIELD_UID)
        if not uid:
            uid = self._field(source, FIELD_AUDIT_LOGINUID)
        if not uid:
            return ""
        return self.resolver.resolve(uid)

    def process_label(self, source: LogSource) -> str:
        label = self._field(source, FIELD_SYSLOG_IDENTIFIER)
        if not label:
            label = self._field(source, FIELD_COMM)
        return label

    def render(self, source: LogSource) -> Optional[str]:
        """Render the current record.

        Returns:
            The rendered line including its terminator, or None when the
            record's timestamp cannot be read or formatted
        """
        try:
            usec = source.get_realtime_usec()
        except LogSourceError as e:
            logger.error(f"Failed to read record timestamp ({e})")
            return None

        try:
            timestamp = self.format_timestamp(usec)
        except (ValueError, OverflowError, OSError) as e:
            logger.error(f"Record timestamp {usec} out of range ({e})")
            return None

        color = self.severity_color(source)

        parts = [DIM, timestamp, self._field(source, FIELD_HOSTNAME)]

        user = self.identity(source)
        if user:
            parts.append(f":{user}")

        parts.append(" ")
        parts.append(self.process_label(source))

        pid = self._field(source, FIELD_PID)
        if pid:
            parts.append(f"[{pid}]")

        parts.extend([": ", color, self._field(source, FIELD_MESSAGE), RESET, "\n"])
        return "".join(parts)

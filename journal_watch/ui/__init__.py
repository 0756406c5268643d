"""Terminal rendering of log records."""

from .constants import SEVERITY_COLORS, Severity
from .render import RecordRenderer

__all__ = ["RecordRenderer", "SEVERITY_COLORS", "Severity"]

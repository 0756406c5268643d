"""Constants for record rendering."""

from enum import IntEnum
from typing import Optional

# ANSI escape sequences
RESET = "\033[0m"
DIM = "\033[02;37m"


class Severity(IntEnum):
    """syslog priority levels, 0 most urgent."""

    EMERGENCY = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFORMATIONAL = 6
    DEBUG = 7

    @classmethod
    def parse(cls, text: Optional[str]) -> "Severity":
        """Parse a PRIORITY value; anything unusable is DEBUG."""
        if not text:
            return cls.DEBUG
        try:
            return cls(int(text))
        except ValueError:
            return cls.DEBUG


SEVERITY_COLORS = {
    Severity.EMERGENCY: "\033[01;37;41m",  # bright red background
    Severity.ALERT: "\033[01;31m",  # red
    Severity.CRITICAL: "\033[38;5;208m",  # orange
    Severity.ERROR: "\033[01;33m",  # bright yellow
    Severity.WARNING: "\033[00;33m",  # yellow
    Severity.NOTICE: "\033[00;32m",  # green
    Severity.INFORMATIONAL: RESET,  # terminal default
    Severity.DEBUG: "\033[02;90m",  # dim gray
}

# Local wall clock, e.g. "14:03:07 Mar 09 "
TIMESTAMP_FORMAT = "%H:%M:%S %b %d "

# Record fields consumed by the renderer
FIELD_PRIORITY = "PRIORITY"
FIELD_HOSTNAME = "_HOSTNAME"
FIELD_UID = "_UID"
FIELD_AUDIT_LOGINUID = "_AUDIT_LOGINUID"
FIELD_SYSLOG_IDENTIFIER = "SYSLOG_IDENTIFIER"
FIELD_COMM = "_COMM"
FIELD_PID = "_PID"
FIELD_MESSAGE = "MESSAGE"

"""Default configuration values."""

DEFAULT_HISTORY = 20
DEFAULT_ON_INVALIDATE = "reopen"
DEFAULT_FALLBACK_TIMEOUT = 1.0
DEFAULT_MAX_ATTEMPTS = 10
DEFAULT_LOG_LEVEL = "WARNING"

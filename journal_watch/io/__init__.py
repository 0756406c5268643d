"""Input/output and logging utilities for journal-watch."""

from .directories import get_config_dir, get_default_config_path
from .logger import get_logger, setup_logging

__all__ = [
    "get_config_dir",
    "get_default_config_path",
    "get_logger",
    "setup_logging",
]

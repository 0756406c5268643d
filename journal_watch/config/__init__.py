"""Configuration for journal-watch."""

from .config import Config
from .schema import JournalWatchConfig

__all__ = ["Config", "JournalWatchConfig"]

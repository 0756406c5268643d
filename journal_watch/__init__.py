"""journal-watch - live, colorized tail of the local system journal"""

__version__ = "0.1.0"

# Config exports
from .config import Config

# Core exports
from .core import FieldExtractor, IdentityResolver, ReadinessWaiter
from .core.engine import EngineSettings, InvalidationStrategy, TailEngine

# IO exports
from .io import get_logger

# Source exports
from .sources import LogSource, MonotonicPosition, SourceEvent

# UI exports
from .ui import RecordRenderer, Severity

__all__ = [
    # Version
    "__version__",
    # Core
    "EngineSettings",
    "FieldExtractor",
    "IdentityResolver",
    "InvalidationStrategy",
    "ReadinessWaiter",
    "TailEngine",
    # Sources
    "LogSource",
    "MonotonicPosition",
    "SourceEvent",
    # UI
    "RecordRenderer",
    "Severity",
    # Config
    "Config",
    # IO
    "get_logger",
]

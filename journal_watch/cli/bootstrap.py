"""Wiring of the tail engine to the local journal and standard output."""

import os
import sys
from typing import Callable, Optional, TextIO

from ..config import Config
from ..core.engine import TailEngine
from ..core.exceptions import RegistrationError, SourceOpenError
from ..core.extractor import FieldExtractor
from ..core.identity import IdentityResolver
from ..core.readiness import ReadinessWaiter
from ..io.logger import get_logger
from ..sources.base import LogSource, SourceOpener
from ..ui.render import RecordRenderer

logger = get_logger("bootstrap")


def open_default_source() -> LogSource:
    """Open the local systemd journal.

    Raises:
        SourceOpenError: If systemd-python is missing or the journal
            cannot be opened
    """
    try:
        from ..sources.journal import open_journal
    except ImportError as e:
        raise SourceOpenError(
            "systemd-python is not installed (pip install 'journal-watch[journal]')"
        ) from e
    return open_journal()


def check_privileges() -> bool:
    """Warn when only the user's own journal will be visible."""
    if os.geteuid() != 0:
        logger.warning("Not running as root, will only print user journal")
        return False
    return True


def prepare_output(stream: TextIO) -> TextIO:
    """Make ``stream`` pass record bytes through unchanged, line by line.

    Field values are decoded with ``surrogateescape``, so encoding them
    back the same way restores the journal's bytes whatever the locale.
    Streams that cannot be reconfigured are returned as they are.
    """
    if hasattr(stream, "reconfigure"):
        stream.reconfigure(
            encoding="utf-8", errors="surrogateescape", line_buffering=True
        )
    return stream


def run_tail(
    config: Config,
    opener: Optional[SourceOpener] = None,
    output: Optional[TextIO] = None,
    waiter_factory: Callable[[], ReadinessWaiter] = ReadinessWaiter,
) -> int:
    """Open the source, follow it and clean up on every exit path.

    Returns:
        The engine's exit code (0 when the loop ends on its own)

    Raises:
        SourceOpenError: The source could not be opened (fatal)
        SeekError, TailLoopError: The loop could not continue
    """
    opener = opener or open_default_source
    output = prepare_output(output or sys.stdout)

    source = opener()
    try:
        waiter = waiter_factory()
    except OSError as e:
        source.close()
        raise RegistrationError(
            f"Failed to create an epoll instance ({e})", errno=e.errno
        ) from e

    renderer = RecordRenderer(
        FieldExtractor(config.get("extraction.max_attempts")),
        IdentityResolver(),
    )
    engine = TailEngine(
        source, opener, renderer, output, waiter, config.engine_settings()
    )

    try:
        return engine.run()
    finally:
        engine.close()
        waiter.close()

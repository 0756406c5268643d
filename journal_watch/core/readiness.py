"""Readiness waiting on log source descriptors."""

import select
from typing import Optional

from ..io.logger import get_logger
from .exceptions import RegistrationError, WaitError

logger = get_logger("readiness")


class ReadinessWaiter:
    """Blocks until a registered descriptor becomes ready.

    Thin wrapper over ``select.epoll``. Waits interrupted by a signal are
    retried rather than reported.
    """

    def __init__(self):
        self._epoll = select.epoll()
        self._registered = set()

    def register(self, fd: int, events: int) -> None:
        """Register a descriptor with the given poll event mask.

        Raises:
            RegistrationError: If the kernel refuses the registration
        """
        try:
            self._epoll.register(fd, events)
        except (OSError, ValueError) as e:
            raise RegistrationError(
                f"Failed to add descriptor {fd} to epoll instance ({e})",
                errno=getattr(e, "errno", None),
            ) from e
        self._registered.add(fd)

    def deregister(self, fd: int) -> None:
        """Stop watching a descriptor; unknown or closed descriptors are ignored."""
        if fd not in self._registered:
            return
        self._registered.discard(fd)
        try:
            self._epoll.unregister(fd)
        except (OSError, ValueError) as e:
            # Closing a descriptor removes it from epoll already
            logger.debug(f"Descriptor {fd} already gone from epoll: {e}")

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Wait for any registered descriptor.

        Args:
            timeout: Seconds to wait, None to wait indefinitely

        Returns:
            True when a descriptor fired, False on timeout

        Raises:
            WaitError: On any failure other than an interrupted wait
        """
        epoll_timeout = -1 if timeout is None else timeout
        while True:
            try:
                events = self._epoll.poll(epoll_timeout, 1)
            except InterruptedError:
                continue
            except OSError as e:
                raise WaitError(f"epoll_wait() failed ({e})", errno=e.errno) from e
            return bool(events)

    def close(self) -> None:
        self._registered.clear()
        self._epoll.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

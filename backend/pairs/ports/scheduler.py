"""Port interfaces for scheduled work (game clock, delayed reverts)."""

from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class ScheduledHandle(Protocol):
    """Handle to a pending callback."""

    def cancel(self) -> None:
        """Cancel the callback. Safe to call after it has run."""
        ...


@runtime_checkable
class Scheduler(Protocol):
    """Schedules callbacks on the host's event loop.

    The engine never sleeps; every delayed action goes through this port
    so a session can cancel what it scheduled.
    """

    def call_later(self, delay_sec: float, callback: Callable[[], None]) -> ScheduledHandle:
        """Run callback once after delay_sec seconds."""
        ...

    def time(self) -> float:
        """Monotonic clock in seconds, used for elapsed-time measurement."""
        ...

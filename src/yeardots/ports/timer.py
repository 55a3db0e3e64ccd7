"""Cancellable timer interface."""

from typing import Callable, Protocol


class TimerHandle(Protocol):
    """A scheduled callback that has not necessarily run yet."""

    def cancel(self) -> None:
        """Stop the callback from running. Safe to call more than once."""
        ...


class TimerScheduler(Protocol):
    """Interface for running a callback once after a delay."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Schedule ``callback`` to run after ``delay`` seconds."""
        ...

"""Clock interface."""

from datetime import datetime, tzinfo
from typing import Protocol


class Clock(Protocol):
    """Supplies "now" and the timezone the calendar is read in."""

    @property
    def tzinfo(self) -> tzinfo:
        ...

    def now(self) -> datetime:
        """Current time as an aware datetime in ``tzinfo``."""
        ...

"""System clock adapter."""

import logging
from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)


class SystemClock:
    """
    Wall clock in a named timezone.

    Implements Clock protocol. An empty or unknown timezone name falls back
    to the machine's local timezone.
    """

    def __init__(self, timezone: str = ""):
        self.timezone = timezone
        self._tz = _resolve_timezone(timezone)

    @property
    def tzinfo(self) -> tzinfo:
        return self._tz

    def now(self) -> datetime:
        return datetime.now(self._tz)


def _resolve_timezone(name: str) -> tzinfo:
    if name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown timezone '{name}', using local time")
    return datetime.now().astimezone().tzinfo or timezone.utc

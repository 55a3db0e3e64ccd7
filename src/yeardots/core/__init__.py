"""Functional core - pure business logic with no I/O."""

from .calendar import (
    CalendarDay,
    DayState,
    is_leap_year,
    days_in_year,
    day_of_year,
    date_for_day_of_year,
    today,
    day_state,
    is_future,
)
from .markers import (
    MARKER_LIMIT,
    FutureDayMarker,
    normalize_markers,
    encode_snapshot,
    decode_snapshot,
    snapshot_key,
)
from .journal import JournalEntry, EditState, CommitAction, plan_commit

__all__ = [
    # Calendar
    "CalendarDay",
    "DayState",
    "is_leap_year",
    "days_in_year",
    "day_of_year",
    "date_for_day_of_year",
    "today",
    "day_state",
    "is_future",
    # Markers
    "MARKER_LIMIT",
    "FutureDayMarker",
    "normalize_markers",
    "encode_snapshot",
    "decode_snapshot",
    "snapshot_key",
    # Journal
    "JournalEntry",
    "EditState",
    "CommitAction",
    "plan_commit",
]

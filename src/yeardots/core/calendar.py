"""Pure calendar domain logic - day-of-year arithmetic with no I/O."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from enum import Enum
from typing import TYPE_CHECKING

from yeardots.errors import InvalidDay

if TYPE_CHECKING:
    from yeardots.ports.clock import Clock


class DayState(Enum):
    """Where a day sits relative to today."""

    PAST = "past"
    TODAY = "today"
    FUTURE = "future"


@dataclass(frozen=True)
class CalendarDay:
    """A (year, day-of-year) pair. Always a real day of that year."""

    year: int
    day_of_year: int

    def __post_init__(self) -> None:
        _check_day(self.year, self.day_of_year)

    @classmethod
    def from_date(cls, value: date) -> "CalendarDay":
        return cls(year=value.year, day_of_year=day_of_year(value))

    def to_date(self) -> date:
        return date_for_day_of_year(self.year, self.day_of_year)

    @property
    def total_days(self) -> int:
        return days_in_year(self.year)


def is_leap_year(year: int) -> bool:
    """Gregorian rule: divisible by 4, except centuries not divisible by 400."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_year(year: int) -> int:
    """Number of days in a year (365 or 366)."""
    return 366 if is_leap_year(year) else 365


def day_of_year(value: date | datetime, tz: tzinfo | None = None) -> int:
    """
    1-based ordinal of a date within its year.

    Aware datetimes are converted to ``tz`` first so the result matches the
    caller's local calendar. Naive values are taken as already local.
    """
    if isinstance(value, datetime) and tz is not None and value.tzinfo is not None:
        value = value.astimezone(tz)
    return value.timetuple().tm_yday


def date_for_day_of_year(year: int, day: int) -> date:
    """
    Resolve a day-of-year to a calendar date.

    Raises:
        InvalidDay: day is outside [1, days_in_year(year)] or the input
            cannot be resolved to a date at all.
    """
    _check_day(year, day)
    return date(year, 1, 1) + timedelta(days=day - 1)


def today(clock: "Clock") -> CalendarDay:
    """Today's year and day-of-year according to the clock's timezone."""
    now = clock.now()
    if now.tzinfo is not None:
        now = now.astimezone(clock.tzinfo)
    return CalendarDay.from_date(now.date())


def is_future(day: int, today_day: int) -> bool:
    """A day is future only when strictly after today."""
    return day > today_day


def day_state(day: int, today_day: int) -> DayState:
    if day < today_day:
        return DayState.PAST
    if day == today_day:
        return DayState.TODAY
    return DayState.FUTURE


# ============== Labels ==============


def format_long(value: date) -> str:
    """Readable date, e.g. "January 12"."""
    return f"{value.strftime('%B')} {value.day}"


def format_header(year: int, day: int) -> str:
    """Editor header, e.g. "JAN 12". Falls back to "DAY n" for bad input."""
    try:
        value = date_for_day_of_year(year, day)
    except InvalidDay:
        return f"DAY {day}"
    return f"{value.strftime('%b')} {value.day}".upper()


def progress_label(year: int, day: int) -> str:
    return f"Day {day} of {days_in_year(year)}"


def accessibility_label(year: int, day: int, state: DayState) -> str:
    """Spoken label for a single day dot."""
    try:
        value = date_for_day_of_year(year, day)
    except InvalidDay:
        return f"Day {day}"
    suffix = {
        DayState.PAST: "passed",
        DayState.TODAY: "today",
        DayState.FUTURE: "future",
    }[state]
    return f"{format_long(value)}, {suffix}"


def _check_day(year: object, day: object) -> None:
    for value in (year, day):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidDay(year, day, "not an integer")
    if not date.min.year <= year <= date.max.year:
        raise InvalidDay(year, day, "year out of range")
    if not 1 <= day <= days_in_year(year):
        raise InvalidDay(year, day, f"expected 1-{days_in_year(year)}")

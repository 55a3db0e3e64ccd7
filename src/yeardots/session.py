"""Year session - routes UI events to the marker store and journal controller."""

import logging
from dataclasses import dataclass

from .core.calendar import (
    CalendarDay,
    DayState,
    day_state,
    days_in_year,
    is_future,
    today as calendar_today,
)
from .core.journal import EditState
from .core.markers import FutureDayMarker
from .errors import StorageError
from .journal import JournalController
from .markers import MarkerStoreTable
from .ports.clock import Clock
from .ports.record_store import JournalRecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayDot:
    """Everything needed to draw one day of the grid."""

    day_of_year: int
    state: DayState
    marked: bool = False
    has_entry: bool = False


@dataclass(frozen=True)
class YearOverview:
    """A year as a list of day dots plus its header."""

    year: int
    today: CalendarDay
    total_days: int
    days: list[DayDot]

    @property
    def header(self) -> str:
        """e.g. "60 / 366". Past years show as complete."""
        if self.year < self.today.year:
            return f"{self.total_days} / {self.total_days}"
        if self.year > self.today.year:
            return f"0 / {self.total_days}"
        return f"{self.today.day_of_year} / {self.total_days}"


class YearSession:
    """
    Single entry point for UI events.

    Events arrive one at a time from the host:
    toggle_marker, text_changed, begin_editing, end_editing, today_advanced.
    """

    def __init__(
        self,
        markers: MarkerStoreTable,
        journal: JournalController,
        store: JournalRecordStore,
        clock: Clock,
    ):
        self.markers = markers
        self.journal = journal
        self._store = store
        self._clock = clock
        self._today = calendar_today(clock)

    @property
    def today(self) -> CalendarDay:
        return self._today

    def toggle_marker(self, day_of_year: int) -> tuple[FutureDayMarker, ...]:
        """
        Mark or unmark a future day of the current year.

        Today and past days cannot be marked; the unchanged set is returned.
        """
        store = self.markers.for_year(self._today.year)
        if not is_future(day_of_year, self._today.day_of_year):
            logger.debug(f"Ignoring marker toggle for non-future day {day_of_year}")
            return store.markers
        return store.toggle(day_of_year)

    def is_marked(self, day_of_year: int, year: int | None = None) -> bool:
        return self.markers.for_year(year or self._today.year).is_marked(day_of_year)

    def begin_editing(self, year: int, day_of_year: int) -> EditState:
        return self.journal.begin_editing(year, day_of_year, today=self._today)

    def text_changed(self, text: str) -> None:
        self.journal.on_text_changed(text)

    def end_editing(self) -> None:
        self.journal.end_editing()

    def today_advanced(self, day_of_year: int | None = None) -> CalendarDay:
        """
        Re-read today and prune markers that are no longer in the future.

        The host calls this when the day rolls over or the timezone changes.
        ``day_of_year`` overrides the clock's day within the clock's year.
        """
        current = calendar_today(self._clock)
        if day_of_year is not None:
            current = CalendarDay(current.year, day_of_year)
        if current != self._today:
            logger.info(f"Today is now {current.year}/{current.day_of_year}")
        self._today = current
        self.markers.today_advanced(current)
        return current

    def overview(self, year: int | None = None) -> YearOverview:
        """Per-day state for drawing a year's grid."""
        year = year or self._today.year
        total = days_in_year(year)

        if year < self._today.year:
            reference = total + 1
        elif year > self._today.year:
            reference = 0
        else:
            reference = self._today.day_of_year

        marked = set(self.markers.for_year(year).marked_days())
        try:
            journaled = self._store.days_with_entries(year)
        except StorageError as e:
            logger.warning(f"Failed to list journal entries for {year}: {e}")
            journaled = set()

        days = [
            DayDot(
                day_of_year=day,
                state=day_state(day, reference),
                marked=day in marked,
                has_entry=day in journaled,
            )
            for day in range(1, total + 1)
        ]
        return YearOverview(year=year, today=self._today, total_days=total, days=days)

    def close(self) -> None:
        """End any edit session and wait for pending marker writes."""
        self.journal.shutdown()
        self.markers.close()

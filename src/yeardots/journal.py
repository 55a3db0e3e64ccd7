"""Journal persistence controller - debounced saves for one editing session.

Edits are buffered and committed after a quiet period, or immediately when
the session ends. A blank buffer never reaches storage: committing it
deletes the day's entry instead.
"""

import logging
import threading
from dataclasses import dataclass, replace

from .core.calendar import CalendarDay
from .core.journal import CommitAction, EditState, JournalEntry, plan_commit
from .errors import StorageError
from .ports.clock import Clock
from .ports.record_store import JournalRecordStore
from .ports.timer import TimerHandle, TimerScheduler

logger = logging.getLogger(__name__)

DEBOUNCE_SECONDS = 2.0


@dataclass
class _EditSession:
    year: int
    day_of_year: int
    buffer: str
    existing: JournalEntry | None
    read_only: bool = False

    @property
    def key(self) -> tuple[int, int]:
        return (self.year, self.day_of_year)


class JournalController:
    """
    Mediates between one active edit buffer and the record store.

    Storage failures are logged and dropped; they never reach the caller.
    All state changes happen under one lock, so a firing timer and
    end_editing() cannot both commit.
    """

    def __init__(
        self,
        store: JournalRecordStore,
        clock: Clock,
        scheduler: TimerScheduler,
        debounce_seconds: float = DEBOUNCE_SECONDS,
    ):
        self._store = store
        self._clock = clock
        self._scheduler = scheduler
        self.debounce_seconds = debounce_seconds
        self._lock = threading.RLock()
        self._session: _EditSession | None = None
        self._pending: TimerHandle | None = None
        self._generation = 0

    @property
    def is_editing(self) -> bool:
        return self._session is not None

    @property
    def pending(self) -> bool:
        """True while a debounced save is scheduled."""
        return self._pending is not None

    @property
    def current_day(self) -> CalendarDay | None:
        session = self._session
        if session is None:
            return None
        return CalendarDay(session.year, session.day_of_year)

    @property
    def buffer(self) -> str:
        session = self._session
        return session.buffer if session else ""

    def begin_editing(
        self,
        year: int,
        day_of_year: int,
        today: CalendarDay | None = None,
    ) -> EditState:
        """
        Open a session for a day and load its current text.

        Any open session is ended first. If ``today`` is given and the day
        comes after it, the session is read-only and never saves.

        Raises:
            InvalidDay: the day does not exist in that year.
        """
        day = CalendarDay(year, day_of_year)

        with self._lock:
            if self._session is not None:
                self.end_editing()

            read_only = today is not None and (day.year, day.day_of_year) > (
                today.year,
                today.day_of_year,
            )

            try:
                existing = self._store.find(year, day_of_year)
            except StorageError as e:
                logger.warning(f"Failed to load journal entry {year}/{day_of_year}: {e}")
                existing = None

            self._session = _EditSession(
                year=year,
                day_of_year=day_of_year,
                buffer=existing.text if existing else "",
                existing=existing,
                read_only=read_only,
            )
            logger.debug(f"Editing {year}/{day_of_year} (existing={existing is not None}, read_only={read_only})")

            return EditState(
                existing_text=existing.text if existing else "",
                has_existing_entry=existing is not None,
                read_only=read_only,
            )

    def on_text_changed(self, text: str) -> None:
        """Buffer the latest text and restart the debounce timer."""
        with self._lock:
            session = self._session
            if session is None:
                logger.debug("Text change with no editing session, ignoring")
                return
            if session.read_only:
                return

            session.buffer = text
            self._cancel_pending()
            generation = self._generation
            self._pending = self._scheduler.call_later(
                self.debounce_seconds,
                lambda: self._on_timer(generation),
            )

    def commit(self, year: int, day_of_year: int, text: str) -> None:
        """
        Persist text for a day.

        Blank text deletes the day's entry if there is one. Otherwise the
        entry is updated, or inserted if the day has none yet.
        """
        with self._lock:
            session = self._session
            if session is not None and session.key == (year, day_of_year):
                existing = session.existing
            else:
                session = None
                try:
                    existing = self._store.find(year, day_of_year)
                except StorageError as e:
                    logger.warning(f"Dropping save for {year}/{day_of_year}, lookup failed: {e}")
                    return

            action, trimmed = plan_commit(existing, text)
            try:
                match action:
                    case CommitAction.NOOP:
                        return
                    case CommitAction.DELETE:
                        self._store.delete(existing)
                        existing = None
                    case CommitAction.UPDATE:
                        existing = replace(existing, text=trimmed, updated_at=self._clock.now())
                        self._store.update(existing)
                    case CommitAction.INSERT:
                        existing = JournalEntry(
                            year=year,
                            day_of_year=day_of_year,
                            text=trimmed,
                            updated_at=self._clock.now(),
                        )
                        self._store.insert(existing)
            except StorageError as e:
                logger.warning(f"Failed to {action.value} journal entry {year}/{day_of_year}: {e}")
                return

            logger.debug(f"Journal {action.value} {year}/{day_of_year}")
            if session is not None:
                session.existing = existing

    def end_editing(self) -> None:
        """Cancel any pending save and commit the buffer now."""
        with self._lock:
            self._cancel_pending()
            session = self._session
            if session is None:
                return
            try:
                if not session.read_only:
                    self.commit(session.year, session.day_of_year, session.buffer)
            finally:
                self._session = None

    def shutdown(self) -> None:
        self.end_editing()

    def _cancel_pending(self) -> None:
        self._generation += 1
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _on_timer(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._session is None:
                return
            self._pending = None
            session = self._session
            self.commit(session.year, session.day_of_year, session.buffer)

"""Marker store - bounded per-year set of future-day markers.

Each MarkerStore owns one year's markers and is the only writer of that
year's snapshot in the blob cache. Snapshot writes are queued on a
per-store SerialWriter so they land in the order they were made.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable

from .core.calendar import CalendarDay, days_in_year
from .core.markers import (
    MARKER_LIMIT,
    FutureDayMarker,
    decode_snapshot,
    encode_snapshot,
    normalize_markers,
    snapshot_key,
)
from .errors import DecodeError, StorageError
from .ports.blob_cache import BlobCache
from .ports.clock import Clock

logger = logging.getLogger(__name__)


class SerialWriter:
    """
    Fire-and-forget writes on a single worker thread.

    One worker means jobs run strictly in submission order, so a later
    snapshot can never be overwritten by an earlier one.
    """

    def __init__(self, name: str = "markers"):
        self.name = name
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, job: Callable[[], None]) -> None:
        """Queue a job. Jobs submitted after close() are dropped."""
        if self._closed:
            logger.warning(f"Writer {self.name} is closed, dropping write")
            return
        self._executor.submit(job)

    def flush(self, timeout: float | None = None) -> None:
        """Block until every job submitted so far has run."""
        if self._closed:
            return
        self._executor.submit(lambda: None).result(timeout=timeout)

    def close(self) -> None:
        self._closed = True
        self._executor.shutdown(wait=True)


class InlineWriter:
    """Runs each write immediately on the caller's thread."""

    def submit(self, job: Callable[[], None]) -> None:
        job()

    def flush(self, timeout: float | None = None) -> None:
        pass

    def close(self) -> None:
        pass


class MarkerStore:
    """
    Future-day markers for a single year.

    At most ``limit`` markers, one per day, all within the year. Marking a
    day when full evicts the marker created longest ago.
    """

    def __init__(
        self,
        year: int,
        cache: BlobCache,
        clock: Clock,
        writer: SerialWriter | InlineWriter | None = None,
        limit: int = MARKER_LIMIT,
    ):
        self.year = year
        self.limit = limit
        self._cache = cache
        self._clock = clock
        self._writer = writer or SerialWriter(name=f"markers-{year}")
        self._key = snapshot_key(year)
        self._markers: tuple[FutureDayMarker, ...] = ()
        self._load()

    @property
    def markers(self) -> tuple[FutureDayMarker, ...]:
        return self._markers

    def marked_days(self) -> list[int]:
        """Marked days in the order they were marked."""
        return [m.day_of_year for m in self._markers]

    def load(self) -> tuple[FutureDayMarker, ...]:
        """
        Reload from the cache, repairing the snapshot if needed.

        A missing, unreadable or corrupt snapshot loads as an empty set.
        If normalization changes what was read, the repaired set is
        written back. Queued writes are flushed first so the reload sees
        every change already made in memory.
        """
        self._writer.flush()
        return self._load()

    def _load(self) -> tuple[FutureDayMarker, ...]:
        loaded = self._read_snapshot()
        normalized = tuple(normalize_markers(loaded, self.year, self.limit))
        self._markers = normalized
        if list(normalized) != loaded:
            logger.info(f"Repaired marker snapshot for {self.year}: {len(loaded)} -> {len(normalized)}")
            self._persist()
        return self._markers

    def is_marked(self, day_of_year: int) -> bool:
        return any(m.day_of_year == day_of_year for m in self._markers)

    def toggle(self, day_of_year: int) -> tuple[FutureDayMarker, ...]:
        """
        Mark or unmark a day and persist.

        Raises:
            InvalidDay: day_of_year is not a day of this store's year.
        """
        CalendarDay(self.year, day_of_year)

        remaining = tuple(m for m in self._markers if m.day_of_year != day_of_year)
        if len(remaining) != len(self._markers):
            self._markers = remaining
            logger.debug(f"Unmarked {self.year}/{day_of_year}")
        else:
            marker = FutureDayMarker(
                year=self.year,
                day_of_year=day_of_year,
                created_at=self._clock.now(),
            )
            self._markers = tuple(normalize_markers([*self._markers, marker], self.year, self.limit))
            logger.debug(f"Marked {self.year}/{day_of_year}")

        self._persist()
        return self._markers

    def prune_expired(self, today_day_of_year: int) -> tuple[FutureDayMarker, ...]:
        """Drop markers for today and earlier. Persists only on change."""
        remaining = tuple(m for m in self._markers if m.day_of_year > today_day_of_year)
        if remaining != self._markers:
            logger.debug(f"Pruned {len(self._markers) - len(remaining)} expired markers for {self.year}")
            self._markers = remaining
            self._persist()
        return self._markers

    def flush(self, timeout: float | None = None) -> None:
        """Wait for queued snapshot writes."""
        self._writer.flush(timeout)

    def close(self) -> None:
        self._writer.close()

    def _read_snapshot(self) -> list[FutureDayMarker]:
        try:
            data = self._cache.read(self._key)
        except StorageError as e:
            logger.warning(f"Failed to read markers for {self.year}: {e}")
            return []
        if data is None:
            return []
        try:
            return decode_snapshot(data)
        except DecodeError as e:
            logger.warning(f"Discarding corrupt marker snapshot for {self.year}: {e}")
            return []

    def _persist(self) -> None:
        data = encode_snapshot(self._markers)
        key = self._key

        def write() -> None:
            try:
                self._cache.write(key, data)
            except Exception as e:
                logger.warning(f"Failed to save markers for {self.year}: {e}")

        self._writer.submit(write)


class MarkerStoreTable:
    """
    Explicit year -> MarkerStore table.

    Stores are created on first use and live until close(). A store
    created after today_advanced() is reconciled against that day at once.
    """

    def __init__(
        self,
        cache: BlobCache,
        clock: Clock,
        limit: int = MARKER_LIMIT,
        writer_factory: Callable[[int], SerialWriter | InlineWriter] | None = None,
    ):
        self._cache = cache
        self._clock = clock
        self._limit = limit
        self._writer_factory = writer_factory or (lambda year: SerialWriter(name=f"markers-{year}"))
        self._stores: dict[int, MarkerStore] = {}
        self._today: CalendarDay | None = None

    def __contains__(self, year: int) -> bool:
        return year in self._stores

    def years(self) -> list[int]:
        return sorted(self._stores)

    def for_year(self, year: int) -> MarkerStore:
        store = self._stores.get(year)
        if store is None:
            store = MarkerStore(
                year,
                self._cache,
                self._clock,
                writer=self._writer_factory(year),
                limit=self._limit,
            )
            self._stores[year] = store
            if self._today is not None:
                _reconcile(store, self._today)
        return store

    def today_advanced(self, today: CalendarDay) -> None:
        """
        Reconcile every loaded store against a new today.

        The current year drops days up to today. Earlier years are wholly in
        the past and drop everything. Later years are untouched.
        """
        self._today = today
        self.for_year(today.year)
        for store in self._stores.values():
            _reconcile(store, today)

    def flush(self, timeout: float | None = None) -> None:
        for store in self._stores.values():
            store.flush(timeout)

    def close(self) -> None:
        for store in self._stores.values():
            store.close()
        self._stores.clear()


def _reconcile(store: MarkerStore, today: CalendarDay) -> None:
    if store.year == today.year:
        store.prune_expired(today.day_of_year)
    elif store.year < today.year:
        store.prune_expired(days_in_year(store.year))

"""Wiring between configuration, adapters and the year session."""

from contextlib import contextmanager
from typing import Iterator

from .adapters.apscheduler_timer import APSchedulerTimer
from .adapters.file_cache import FileBlobCache
from .adapters.file_journal import FileJournalStore
from .adapters.system_clock import SystemClock
from .config import Config, cache_path, journal_path, load_config
from .journal import JournalController
from .markers import MarkerStoreTable
from .session import YearSession


def get_journal(config: Config) -> FileJournalStore:
    """Resolve journal store from config."""
    return FileJournalStore(journal_path(config))


def get_cache(config: Config) -> FileBlobCache:
    """Resolve marker cache from config."""
    return FileBlobCache(cache_path(config))


@contextmanager
def open_session(config: Config | None = None) -> Iterator[YearSession]:
    """Build a session from config, closing it (and its timers) on exit."""
    config = config or load_config()
    clock = SystemClock(config.timezone)
    store = get_journal(config)
    timer = APSchedulerTimer()
    session = YearSession(
        markers=MarkerStoreTable(get_cache(config), clock, limit=config.marker_limit),
        journal=JournalController(store, clock, timer, debounce_seconds=config.debounce_seconds),
        store=store,
        clock=clock,
    )
    try:
        session.today_advanced()
        yield session
    finally:
        session.close()
        timer.shutdown()

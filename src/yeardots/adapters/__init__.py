"""Adapters - I/O implementations of ports."""

from .file_journal import FileJournalStore
from .file_cache import FileBlobCache
from .system_clock import SystemClock
from .apscheduler_timer import APSchedulerTimer

__all__ = [
    "FileJournalStore",
    "FileBlobCache",
    "SystemClock",
    "APSchedulerTimer",
]

"""Ports - interfaces/protocols for external dependencies."""

from .record_store import JournalRecordStore
from .blob_cache import BlobCache
from .clock import Clock
from .timer import TimerHandle, TimerScheduler

__all__ = [
    "JournalRecordStore",
    "BlobCache",
    "Clock",
    "TimerHandle",
    "TimerScheduler",
]

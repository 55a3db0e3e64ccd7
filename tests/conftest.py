"""Shared fakes for ports."""

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Callable

import pytest

from yeardots.core.journal import JournalEntry
from yeardots.errors import StorageError


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime):
        self._now = now

    @property
    def tzinfo(self):
        return self._now.tzinfo

    def now(self) -> datetime:
        return self._now

    def advance(self, **kwargs) -> datetime:
        self._now = self._now + timedelta(**kwargs)
        return self._now

    def set(self, now: datetime) -> None:
        self._now = now


class ManualHandle:
    def __init__(self, delay: float, callback: Callable[[], None]):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualTimer:
    """Timer scheduler that runs callbacks only when fire() is called."""

    def __init__(self):
        self.handles: list[ManualHandle] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def live(self) -> list[ManualHandle]:
        return [h for h in self.handles if not h.cancelled and not h.fired]

    def fire(self, handle: ManualHandle) -> None:
        """Run a callback even if cancelled, like a timer racing its cancel."""
        handle.fired = True
        handle.callback()

    def fire_all(self) -> None:
        for handle in self.live:
            self.fire(handle)


class MemoryRecordStore:
    """In-memory JournalRecordStore with failure switches."""

    def __init__(self):
        self.entries: dict[tuple[int, int], JournalEntry] = {}
        self.calls: list[str] = []
        self.fail_find = False
        self.fail_writes = False

    def find(self, year: int, day_of_year: int) -> JournalEntry | None:
        self.calls.append("find")
        if self.fail_find:
            raise StorageError("find failed")
        entry = self.entries.get((year, day_of_year))
        return replace(entry) if entry else None

    def insert(self, entry: JournalEntry) -> None:
        self.calls.append("insert")
        if self.fail_writes:
            raise StorageError("insert failed")
        if entry.key in self.entries:
            raise StorageError("duplicate key")
        self.entries[entry.key] = replace(entry)

    def update(self, entry: JournalEntry) -> None:
        self.calls.append("update")
        if self.fail_writes:
            raise StorageError("update failed")
        if entry.key not in self.entries:
            raise StorageError("missing key")
        self.entries[entry.key] = replace(entry)

    def delete(self, entry: JournalEntry) -> None:
        self.calls.append("delete")
        if self.fail_writes:
            raise StorageError("delete failed")
        self.entries.pop(entry.key, None)

    def days_with_entries(self, year: int) -> set[int]:
        return {day for (y, day) in self.entries if y == year}


class MemoryBlobCache:
    """In-memory BlobCache that counts writes."""

    def __init__(self):
        self.blobs: dict[str, bytes] = {}
        self.writes: list[str] = []
        self.fail_reads = False
        self.fail_writes = False

    def read(self, key: str) -> bytes | None:
        if self.fail_reads:
            raise StorageError("read failed")
        return self.blobs.get(key)

    def write(self, key: str, data: bytes) -> None:
        self.writes.append(key)
        if self.fail_writes:
            raise StorageError("write failed")
        self.blobs[key] = data


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 4, 24, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def timer():
    return ManualTimer()


@pytest.fixture
def record_store():
    return MemoryRecordStore()


@pytest.fixture
def blob_cache():
    return MemoryBlobCache()

"""Journal record store interface."""

from typing import Protocol

from yeardots.core.journal import JournalEntry


class JournalRecordStore(Protocol):
    """
    Interface for durable journal entries keyed by (year, day_of_year).

    Every method may raise StorageError.
    """

    def find(self, year: int, day_of_year: int) -> JournalEntry | None:
        """Return the entry for a day, or None if there is none."""
        ...

    def insert(self, entry: JournalEntry) -> None:
        """Store a new entry. The key must not already exist."""
        ...

    def update(self, entry: JournalEntry) -> None:
        """Overwrite the text and timestamp of an existing entry."""
        ...

    def delete(self, entry: JournalEntry) -> None:
        """Remove an entry."""
        ...

    def days_with_entries(self, year: int) -> set[int]:
        """Days of a year that have an entry."""
        ...

"""Pure journal domain logic - entry model and commit planning."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


@dataclass
class JournalEntry:
    """A day's journal text. Unique per (year, day_of_year)."""

    year: int
    day_of_year: int
    text: str
    updated_at: datetime

    @property
    def key(self) -> tuple[int, int]:
        return (self.year, self.day_of_year)

    @staticmethod
    def is_blank(text: str) -> bool:
        return not text.strip()


@dataclass(frozen=True)
class EditState:
    """What an editing session starts from."""

    existing_text: str = ""
    has_existing_entry: bool = False
    read_only: bool = False


class CommitAction(Enum):
    """What a commit must do against the record store."""

    NOOP = "noop"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


def plan_commit(existing: JournalEntry | None, text: str) -> tuple[CommitAction, str]:
    """
    Decide how to persist a buffer.

    Pure function - no I/O.

    Returns:
        The action and the trimmed text to store. Blank text deletes an
        existing entry and otherwise does nothing; non-blank text updates
        the existing entry or inserts a new one.
    """
    trimmed = text.strip()
    if not trimmed:
        if existing is None:
            return CommitAction.NOOP, ""
        return CommitAction.DELETE, ""
    if existing is None:
        return CommitAction.INSERT, trimmed
    return CommitAction.UPDATE, trimmed

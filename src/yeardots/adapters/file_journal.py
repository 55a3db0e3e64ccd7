"""File-based journal storage adapter."""

from datetime import datetime
from pathlib import Path

from yeardots.core.journal import JournalEntry
from yeardots.errors import StorageError


class FileJournalStore:
    """
    File-based journal storage.

    Implements JournalRecordStore protocol. Each day gets a markdown file at
    ``<journal_dir>/<year>/<day:03d>.md`` with a short frontmatter block.
    """

    def __init__(self, journal_dir: Path | str):
        self.journal_dir = Path(journal_dir).expanduser()
        self.journal_dir.mkdir(parents=True, exist_ok=True)

    def _path_for_day(self, year: int, day_of_year: int) -> Path:
        """Get the file path for a given day."""
        return self.journal_dir / str(year) / f"{day_of_year:03d}.md"

    def find(self, year: int, day_of_year: int) -> JournalEntry | None:
        """Read the entry for a day. Returns None if not found."""
        path = self._path_for_day(year, day_of_year)
        try:
            if not path.exists():
                return None
            content = path.read_text()
            modified = datetime.fromtimestamp(path.stat().st_mtime).astimezone()
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}") from e
        return _from_markdown(year, day_of_year, content, modified)

    def insert(self, entry: JournalEntry) -> None:
        """Write a new entry. Fails if the day already has one."""
        path = self._path_for_day(entry.year, entry.day_of_year)
        if path.exists():
            raise StorageError(f"Entry already exists for {entry.year}/{entry.day_of_year}")
        self._write(path, entry)

    def update(self, entry: JournalEntry) -> None:
        """Overwrite an existing entry."""
        path = self._path_for_day(entry.year, entry.day_of_year)
        if not path.exists():
            raise StorageError(f"No entry to update for {entry.year}/{entry.day_of_year}")
        self._write(path, entry)

    def delete(self, entry: JournalEntry) -> None:
        """Remove an entry. Deleting a missing entry is a no-op."""
        path = self._path_for_day(entry.year, entry.day_of_year)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to delete {path}: {e}") from e

    def days_with_entries(self, year: int) -> set[int]:
        """List days of a year that have an entry."""
        days = set()
        for path in (self.journal_dir / str(year)).glob("*.md"):
            try:
                days.add(int(path.stem))
            except ValueError:
                continue
        return days

    def _write(self, path: Path, entry: JournalEntry) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(_to_markdown(entry))
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e


def _to_markdown(entry: JournalEntry) -> str:
    """Serialize to frontmatter + text."""
    lines = ["---"]
    lines.append(f"year: {entry.year}")
    lines.append(f"day_of_year: {entry.day_of_year}")
    lines.append(f"updated_at: {entry.updated_at.isoformat()}")
    lines.append("---")
    lines.append("")
    lines.append(entry.text)
    lines.append("")
    return "\n".join(lines)


def _from_markdown(
    year: int, day_of_year: int, content: str, modified: datetime
) -> JournalEntry:
    """Parse frontmatter + text. Files without frontmatter are plain text."""
    if not content.startswith("---"):
        return JournalEntry(
            year=year,
            day_of_year=day_of_year,
            text=content.strip(),
            updated_at=modified,
        )

    parts = content.split("---", 2)
    if len(parts) < 3:
        raise StorageError(f"Incomplete frontmatter for {year}/{day_of_year}")

    data = {}
    for line in parts[1].strip().splitlines():
        if ":" in line:
            key, _, value = line.partition(":")
            data[key.strip()] = value.strip()

    try:
        updated_at = datetime.fromisoformat(data["updated_at"])
    except (KeyError, ValueError) as e:
        raise StorageError(f"Bad updated_at for {year}/{day_of_year}: {e}") from e

    return JournalEntry(
        year=year,
        day_of_year=day_of_year,
        text=parts[2].strip(),
        updated_at=updated_at,
    )

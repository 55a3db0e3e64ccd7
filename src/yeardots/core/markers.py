"""Pure future-day marker logic - normalization and snapshot encoding."""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable

from yeardots.errors import DecodeError

from .calendar import days_in_year

MARKER_LIMIT = 3


@dataclass(frozen=True)
class FutureDayMarker:
    """A user-flagged future day."""

    year: int
    day_of_year: int
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "year": self.year,
            "day_of_year": self.day_of_year,
            "created_at": _to_utc(self.created_at).isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FutureDayMarker":
        year = data["year"]
        day = data["day_of_year"]
        if isinstance(year, bool) or not isinstance(year, int):
            raise DecodeError(f"Marker year is not an integer: {year!r}")
        if isinstance(day, bool) or not isinstance(day, int):
            raise DecodeError(f"Marker day is not an integer: {day!r}")
        return cls(
            year=year,
            day_of_year=day,
            created_at=_to_utc(datetime.fromisoformat(data["created_at"])),
        )


def normalize_markers(
    markers: Iterable[FutureDayMarker],
    year: int,
    limit: int = MARKER_LIMIT,
) -> list[FutureDayMarker]:
    """
    Bring a marker list back within its invariants.

    Pure function - no I/O.

    Steps, in order:
        1. Drop markers for another year or outside [1, days_in_year(year)].
        2. Sort by created_at (stable, so ties keep their input order).
        3. Drop repeat days, keeping the earliest marker for each day.
        4. Keep only the most recent ``limit`` markers.
    """
    max_day = days_in_year(year)
    in_range = [m for m in markers if m.year == year and 1 <= m.day_of_year <= max_day]
    in_range.sort(key=lambda m: _to_utc(m.created_at))

    seen: set[int] = set()
    unique = []
    for marker in in_range:
        if marker.day_of_year in seen:
            continue
        seen.add(marker.day_of_year)
        unique.append(marker)

    if limit <= 0:
        return []
    return unique[-limit:]


def encode_snapshot(markers: Iterable[FutureDayMarker]) -> bytes:
    """Serialize markers as a JSON list with stable field names."""
    return json.dumps([m.to_dict() for m in markers]).encode("utf-8")


def decode_snapshot(data: bytes) -> list[FutureDayMarker]:
    """
    Parse a snapshot written by encode_snapshot.

    Raises:
        DecodeError: bytes are not a JSON list of well-formed markers.
    """
    try:
        raw = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DecodeError(f"Marker snapshot is not valid JSON: {e}") from e

    if not isinstance(raw, list):
        raise DecodeError("Marker snapshot is not a list")

    markers = []
    for item in raw:
        if not isinstance(item, dict):
            raise DecodeError(f"Marker entry is not an object: {item!r}")
        try:
            markers.append(FutureDayMarker.from_dict(item))
        except DecodeError:
            raise
        except (KeyError, TypeError, ValueError) as e:
            raise DecodeError(f"Malformed marker entry {item!r}: {e}") from e
    return markers


def snapshot_key(year: int) -> str:
    """Blob cache key for one year's marker snapshot."""
    return f"future_day_markers.{year}"


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

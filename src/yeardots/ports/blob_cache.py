"""Key-value blob cache interface."""

from typing import Protocol


class BlobCache(Protocol):
    """Interface for small opaque snapshots, e.g. one year's markers."""

    def read(self, key: str) -> bytes | None:
        """Read a blob. Returns None if not found."""
        ...

    def write(self, key: str, data: bytes) -> None:
        """Write/overwrite a blob."""
        ...

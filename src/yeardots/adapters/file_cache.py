"""File-based blob cache adapter."""

import os
import tempfile
from pathlib import Path

from yeardots.errors import StorageError


class FileBlobCache:
    """
    One file per key under a cache directory.

    Implements BlobCache protocol. Writes go through a temp file and
    os.replace so a reader never sees a half-written snapshot.
    """

    def __init__(self, cache_dir: Path | str):
        self.cache_dir = Path(cache_dir).expanduser()
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def _path_for_key(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise StorageError(f"Invalid cache key: {key!r}")
        return self.cache_dir / key

    def read(self, key: str) -> bytes | None:
        """Read a blob. Returns None if not found."""
        path = self._path_for_key(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def write(self, key: str, data: bytes) -> None:
        """Write/overwrite a blob."""
        path = self._path_for_key(key)
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.cache_dir, prefix=".tmp-")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

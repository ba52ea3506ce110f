"""File-backed key-value store."""

import os
import re
import tempfile
from pathlib import Path

from tasklens.config import get_settings
from tasklens.storage.base import KeyValueStore, StorageUnavailableError
from tasklens.utils.mixins import LoggerMixin

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class JsonFileStore(KeyValueStore, LoggerMixin):
    """Keeps each key in its own ``<key>.json`` file under ``base_dir``.

    ``base_dir`` defaults to the configured ``storage_dir``.

    Writes go through a temporary file and ``os.replace`` so readers never
    see a half-written document.
    """

    def __init__(self, base_dir: Path | None = None):
        if base_dir is None:
            base_dir = get_settings().storage_dir
        self.base_dir = Path(base_dir)

    def _path_for(self, key: str) -> Path:
        safe_key = _UNSAFE_KEY_CHARS.sub("_", key)
        if not safe_key.strip("._"):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.base_dir / f"{safe_key}.json"

    def get_item(self, key: str) -> str | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageUnavailableError(f"Cannot read {path}: {e}") from e

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        try:
            self._write_atomic(path, value)
        except OSError as e:
            raise StorageUnavailableError(f"Cannot write {path}: {e}") from e
        self.logger.debug("Stored document", key=key, path=str(path), size=len(value))

    def remove_item(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageUnavailableError(f"Cannot remove {path}: {e}") from e

    def is_available(self) -> bool:
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
        except OSError:
            return False
        return os.access(self.base_dir, os.W_OK)

    def _write_atomic(self, path: Path, serialized: str) -> None:
        """Write ``serialized`` to ``path`` using an atomic file replace."""
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(
            dir=path.parent, prefix=f"{path.stem}_", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
                tmp_file.write(serialized)
                tmp_file.flush()
                os.fsync(tmp_file.fileno())
            os.replace(temp_path, path)
        finally:
            if os.path.exists(temp_path):
                try:
                    os.remove(temp_path)
                except FileNotFoundError:
                    pass

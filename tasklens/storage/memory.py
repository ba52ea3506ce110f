"""In-process storage backends."""

from threading import RLock

from tasklens.storage.base import KeyValueStore, StorageUnavailableError


class InMemoryStore(KeyValueStore):
    """Dictionary-backed store, lost when the process exits."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})
        self._lock = RLock()

    def get_item(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._data)


class UnavailableStore(KeyValueStore):
    """Stands in for a missing backend; every access fails."""

    def get_item(self, key: str) -> str | None:
        raise StorageUnavailableError(f"No storage backend to read '{key}'")

    def set_item(self, key: str, value: str) -> None:
        raise StorageUnavailableError(f"No storage backend to write '{key}'")

    def remove_item(self, key: str) -> None:
        raise StorageUnavailableError(f"No storage backend to remove '{key}'")

    def is_available(self) -> bool:
        return False

"""Key-value storage interface shared by the preset, history and sort stores."""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from tasklens.utils.mixins import LoggerMixin


T = TypeVar("T")


class StorageUnavailableError(Exception):
    """Raised when no storage backend is usable in the current context."""


class KeyValueStore(ABC):
    """String-keyed store holding serialized documents.

    Values are strings and a missing key reads as ``None``.
    """

    @abstractmethod
    def get_item(self, key: str) -> str | None:
        """Return the stored value or ``None`` when the key is absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete ``key``. Removing an absent key is not an error."""

    def is_available(self) -> bool:
        return True


class StoreStatus(str, Enum):
    """Outcome of reading a collection from a store."""

    OK = "ok"
    EMPTY = "empty"
    UNAVAILABLE = "unavailable"


@dataclass
class StoreSnapshot(Generic[T]):
    """Items read from a store together with how the read went.

    ``EMPTY`` means the key held nothing usable, ``UNAVAILABLE`` means there
    was no backend to ask.
    """

    items: list[T] = field(default_factory=list)
    status: StoreStatus = StoreStatus.OK

    @property
    def available(self) -> bool:
        return self.status != StoreStatus.UNAVAILABLE


class JsonCollectionStore(LoggerMixin):
    """Reads and writes one JSON document under a single key."""

    def __init__(self, backend: KeyValueStore, key: str):
        self.backend = backend
        self.key = key

    def read_raw(self) -> StoreSnapshot[Any]:
        """Load the JSON array stored under ``key``.

        Corrupt or non-array documents are logged and read as empty.
        """
        try:
            stored = self.backend.get_item(self.key)
        except StorageUnavailableError:
            self.logger.warning("Storage backend unavailable")
            return StoreSnapshot(status=StoreStatus.UNAVAILABLE)

        if not stored:
            return StoreSnapshot(status=StoreStatus.EMPTY)

        try:
            data = json.loads(stored)
        except json.JSONDecodeError as e:
            self.logger.error("Failed to parse stored document", error=str(e))
            return StoreSnapshot(status=StoreStatus.EMPTY)

        if not isinstance(data, list):
            self.logger.error(
                "Stored document is not a list",
                actual_type=type(data).__name__,
            )
            return StoreSnapshot(status=StoreStatus.EMPTY)

        return StoreSnapshot(items=data)

    def write_raw(self, items: list[Any]) -> None:
        """Serialize ``items`` as a JSON array and store it under ``key``."""
        self.backend.set_item(self.key, json.dumps(items, ensure_ascii=False))

    def remove(self) -> None:
        self.backend.remove_item(self.key)

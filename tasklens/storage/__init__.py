"""Local key-value persistence and the search history built on it."""

from tasklens.storage.base import (
    JsonCollectionStore,
    KeyValueStore,
    StorageUnavailableError,
    StoreSnapshot,
    StoreStatus,
)
from tasklens.storage.json_file import JsonFileStore
from tasklens.storage.memory import InMemoryStore, UnavailableStore
from tasklens.storage.history import COMMON_SUGGESTIONS, HistoryStore, SearchHistoryEntry

__all__ = [
    "KeyValueStore",
    "JsonCollectionStore",
    "StorageUnavailableError",
    "StoreSnapshot",
    "StoreStatus",
    "InMemoryStore",
    "UnavailableStore",
    "JsonFileStore",
    "HistoryStore",
    "SearchHistoryEntry",
    "COMMON_SUGGESTIONS",
]

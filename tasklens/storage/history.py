"""Recent search queries kept in a bounded, de-duplicated history."""

import time
import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from tasklens.config import get_settings
from tasklens.filters.models import SearchFilters
from tasklens.storage.base import (
    JsonCollectionStore,
    KeyValueStore,
    StorageUnavailableError,
    StoreSnapshot,
    StoreStatus,
)
from tasklens.utils.logger import truncate_query

COMMON_SUGGESTIONS: tuple[str, ...] = (
    "high priority tasks",
    "overdue tasks",
    "my tasks",
    "completed projects",
    "in progress",
)


class SearchHistoryEntry(BaseModel):
    """A query the user ran, newest entries first in the store."""

    id: str = Field(..., description="Unique history entry ID")
    query: str = Field(..., description="Query text as typed")
    filters: SearchFilters | None = Field(None, description="Filters used with the query")
    timestamp: datetime = Field(default_factory=datetime.now)
    result_count: int = Field(default=0, ge=0)


def _new_entry_id() -> str:
    return f"search-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"


class HistoryStore(JsonCollectionStore):
    """Persists recent searches under a single key.

    Repeating a query moves it to the front instead of adding a duplicate,
    and the list is capped at ``max_entries``.
    """

    def __init__(
        self,
        backend: KeyValueStore,
        key: str | None = None,
        max_entries: int | None = None,
        suggestion_limit: int | None = None,
    ):
        settings = get_settings()
        super().__init__(backend, key or settings.history_key)
        self.max_entries = max_entries or settings.history_max_entries
        self.suggestion_limit = suggestion_limit or settings.suggestion_limit

    def read(self) -> StoreSnapshot[SearchHistoryEntry]:
        """Load history, newest first, reporting whether the backend answered."""
        raw = self.read_raw()
        entries: list[SearchHistoryEntry] = []
        for item in raw.items:
            try:
                entries.append(SearchHistoryEntry.model_validate(item))
            except ValidationError as e:
                self.logger.warning("Skipping invalid history entry", error=str(e))
        status = raw.status
        if status == StoreStatus.OK and not entries:
            status = StoreStatus.EMPTY
        return StoreSnapshot(items=entries, status=status)

    def entries(self) -> list[SearchHistoryEntry]:
        return self.read().items

    def add(
        self,
        query: str,
        filters: SearchFilters | dict[str, Any] | None = None,
        result_count: int = 0,
    ) -> SearchHistoryEntry | None:
        """Record ``query`` at the front of the history.

        Blank queries are ignored. Returns the stored entry, or ``None`` when
        nothing was written.
        """
        if not query or not query.strip():
            return None

        snapshot = self.read()
        if not snapshot.available:
            self.logger.warning("Search history not saved, storage unavailable")
            return None

        entry = SearchHistoryEntry(
            id=_new_entry_id(),
            query=query,
            filters=SearchFilters.model_validate(filters) if filters is not None else None,
            result_count=max(result_count, 0),
        )

        history = [existing for existing in snapshot.items if existing.query != query]
        history.insert(0, entry)
        trimmed = history[: self.max_entries]

        try:
            self.write_raw([item.model_dump(mode="json") for item in trimmed])
        except StorageUnavailableError as e:
            self.logger.warning("Search history not saved", error=str(e))
            return None

        self.logger.debug(
            "Search recorded",
            query=truncate_query(query),
            result_count=entry.result_count,
            history_size=len(trimmed),
        )
        return entry

    def suggestions(self, query: str) -> list[str]:
        """Suggest queries for the search box.

        An empty input yields the most recent queries. Otherwise history
        entries starting with the input come first, followed by the common
        suggestions containing it.
        """
        history = self.entries()
        normalized_query = (query or "").lower().strip()

        if not normalized_query:
            return [entry.query for entry in history[: self.suggestion_limit]]

        matching = [
            entry.query
            for entry in history
            if entry.query.lower().startswith(normalized_query)
        ]
        common = [s for s in COMMON_SUGGESTIONS if normalized_query in s.lower()]

        # dict preserves first-seen order
        suggestions = list(dict.fromkeys([*matching, *common]))
        return suggestions[: self.suggestion_limit]

    def clear(self) -> None:
        """Remove all history."""
        try:
            self.remove()
        except StorageUnavailableError as e:
            self.logger.warning("Search history not cleared", error=str(e))
            return
        self.logger.info("Search history cleared")

"""Search-related data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from tasklens.config import get_settings
from tasklens.filters.models import SearchFilters


class SearchableType(str, Enum):
    """Kinds of entity a search result can point at."""

    TASK = "task"
    PROJECT = "project"
    NOTE = "note"
    USER = "user"
    TEAM = "team"
    ALL = "all"


class SortField(str, Enum):
    """Keys a ranked result list can be ordered by."""

    RELEVANCE = "relevance"
    DATE = "date"
    TITLE = "title"
    PRIORITY = "priority"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass
class Highlight:
    """Literal matches of the query inside one field."""

    field: str
    text: str
    indices: list[tuple[int, int]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "text": self.text,
            "indices": [list(span) for span in self.indices],
        }


@dataclass
class SearchResult:
    """One ranked hit, normalized across entity types."""

    id: str
    type: SearchableType
    title: str
    score: int
    description: str | None = None
    subtitle: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    highlights: list[Highlight] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "description": self.description,
            "subtitle": self.subtitle,
            "metadata": self.metadata,
            "score": self.score,
            "highlights": [highlight.to_dict() for highlight in self.highlights],
        }


class SearchOptions(BaseModel):
    """A full search request: query, filters, ordering and page."""

    query: str
    filters: SearchFilters | None = None
    limit: int = Field(
        default_factory=lambda: get_settings().default_search_limit, gt=0
    )
    offset: int = Field(default=0, ge=0)
    sort_by: SortField = SortField.RELEVANCE
    sort_order: SortOrder = SortOrder.DESC

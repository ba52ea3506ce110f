"""Free-text search: scoring, per-entity searchers and result composition."""

from tasklens.search.models import (
    Highlight,
    SearchableType,
    SearchOptions,
    SearchResult,
    SortField,
    SortOrder,
)
from tasklens.search.scoring import calculate_score, find_highlights, levenshtein_distance
from tasklens.search.searchers import (
    search_entities,
    search_projects,
    search_tasks,
    search_users,
)
from tasklens.search.composer import (
    FilterOutcome,
    apply_filters,
    compose,
    compose_projects,
    compose_tasks,
    priority_rank,
    sort_results,
)
from tasklens.search.engine import SearchEngine, SearchResponse

__all__ = [
    "Highlight",
    "SearchableType",
    "SearchOptions",
    "SearchResult",
    "SortField",
    "SortOrder",
    "calculate_score",
    "find_highlights",
    "levenshtein_distance",
    "search_tasks",
    "search_projects",
    "search_users",
    "search_entities",
    "apply_filters",
    "sort_results",
    "compose",
    "compose_tasks",
    "compose_projects",
    "priority_rank",
    "FilterOutcome",
    "SearchEngine",
    "SearchResponse",
]

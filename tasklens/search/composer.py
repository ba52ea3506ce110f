"""Filtering and ordering of result lists.

Composition always filters first and sorts the reduced list afterwards.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Any, Generic, TypeVar

from tasklens.filters.engine import (
    calculate_stats,
    filter_projects,
    filter_tasks,
    in_date_range,
)
from tasklens.filters.models import FilterStats, ProjectFilters, SearchFilters, TaskFilters
from tasklens.filters.sorting import SortConfig, compare_text, sort_projects, sort_tasks
from tasklens.search.models import SearchableType, SearchResult, SortField, SortOrder
from tasklens.tasks.models import Project, Task
from tasklens.utils.dates import to_timestamp

T = TypeVar("T")

PRIORITY_RANKS: dict[str, int] = {"high": 3, "medium": 2, "low": 1}


def priority_rank(priority: Any) -> int:
    """Rank used by the priority sort; unknown or missing priorities are 0."""
    if priority is None:
        return 0
    value = getattr(priority, "value", priority)
    if not isinstance(value, str):
        return 0
    return PRIORITY_RANKS.get(value, 0)


def _ids(values: Any) -> list[str]:
    if not values:
        return []
    return [value.get("id") if isinstance(value, dict) else value for value in values]


def apply_filters(
    results: Sequence[SearchResult], filters: SearchFilters | None
) -> list[SearchResult]:
    """Keep the results whose metadata satisfies every set criteria field."""
    filtered = list(results)
    if filters is None:
        return filtered

    if filters.types and SearchableType.ALL.value not in filters.types:
        filtered = [r for r in filtered if r.type.value in filters.types]

    if filters.status:
        filtered = [r for r in filtered if r.metadata.get("status") in filters.status]

    if filters.priority:
        filtered = [r for r in filtered if r.metadata.get("priority") in filters.priority]

    if filters.assignees:
        filtered = [
            r
            for r in filtered
            if any(a in filters.assignees for a in _ids(r.metadata.get("assignees")))
        ]

    if filters.tags:
        filtered = [
            r
            for r in filtered
            if any(t in filters.tags for t in _ids(r.metadata.get("tags")))
        ]

    if filters.date_range and filters.date_range.is_set:
        filtered = [
            r
            for r in filtered
            if in_date_range(r.metadata.get("due_date"), filters.date_range)
        ]

    return filtered


def _date_or_epoch(result: SearchResult) -> float:
    return to_timestamp(result.metadata.get("due_date")) or 0.0


def _comparison(sort_by: SortField) -> Callable[[SearchResult, SearchResult], int]:
    """Comparator giving the descending order for ``sort_by``."""
    if sort_by == SortField.TITLE:
        return lambda a, b: compare_text(b.title, a.title)
    if sort_by == SortField.DATE:
        return lambda a, b: _sign(_date_or_epoch(b) - _date_or_epoch(a))
    if sort_by == SortField.PRIORITY:
        return lambda a, b: priority_rank(b.metadata.get("priority")) - priority_rank(
            a.metadata.get("priority")
        )
    return lambda a, b: b.score - a.score


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def sort_results(
    results: Sequence[SearchResult],
    sort_by: SortField | str = SortField.RELEVANCE,
    sort_order: SortOrder | str = SortOrder.DESC,
) -> list[SearchResult]:
    """Return a new, stably sorted list.

    ``asc`` negates the comparator rather than flipping the key, so
    ascending relevance lists the lowest score first.
    """
    comparison = _comparison(SortField(sort_by))
    if SortOrder(sort_order) == SortOrder.ASC:
        return sorted(results, key=cmp_to_key(lambda a, b: -comparison(a, b)))
    return sorted(results, key=cmp_to_key(comparison))


def compose(
    results: Sequence[SearchResult],
    filters: SearchFilters | None = None,
    sort_by: SortField | str = SortField.RELEVANCE,
    sort_order: SortOrder | str = SortOrder.DESC,
) -> list[SearchResult]:
    """Filter ranked results, then order them."""
    return sort_results(apply_filters(results, filters), sort_by, sort_order)


@dataclass
class FilterOutcome(Generic[T]):
    """Items that passed a filter, plus how many were kept."""

    items: list[T] = field(default_factory=list)
    stats: FilterStats = field(default_factory=FilterStats)


def compose_tasks(
    tasks: Sequence[Task], filters: TaskFilters, sort: SortConfig | None = None
) -> FilterOutcome[Task]:
    """Filter tasks, then sort them when ``sort`` is given."""
    filtered = filter_tasks(tasks, filters)
    ordered = sort_tasks(filtered, sort) if sort else filtered
    return FilterOutcome(items=ordered, stats=calculate_stats(tasks, filtered))


def compose_projects(
    projects: Sequence[Project], filters: ProjectFilters, sort: SortConfig | None = None
) -> FilterOutcome[Project]:
    """Filter projects, then sort them when ``sort`` is given."""
    filtered = filter_projects(projects, filters)
    ordered = sort_projects(filtered, sort) if sort else filtered
    return FilterOutcome(items=ordered, stats=calculate_stats(projects, filtered))

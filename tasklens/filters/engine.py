"""Structured filtering for task and project collections.

Every criteria field narrows the collection (AND across fields); list-valued
fields accept an item when any of its values is allowed (OR within a field).
Fields left unset or empty do not constrain anything.
"""

from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

from tasklens.filters.models import (
    DateRange,
    FilterStats,
    PresetType,
    ProjectFilters,
    SearchFilters,
    TaskFilters,
)
from tasklens.tasks.models import Project, Task
from tasklens.utils.dates import to_timestamp


def in_date_range(value: datetime | None, date_range: DateRange | None) -> bool:
    """Inclusive range check; a missing date only passes an unbounded range."""
    if date_range is None or not date_range.is_set:
        return True
    stamp = to_timestamp(value)
    if stamp is None:
        return False
    start = to_timestamp(date_range.start)
    end = to_timestamp(date_range.end)
    if start is not None and stamp < start:
        return False
    if end is not None and stamp > end:
        return False
    return True


def _matches_text(query: str | None, *fields: str | None) -> bool:
    if not query or not query.strip():
        return True
    needle = query.lower()
    return any(needle in (field or "").lower() for field in fields)


def _intersects(values: Sequence[str], allowed: Sequence[str]) -> bool:
    return any(value in allowed for value in values)


def filter_tasks(tasks: Sequence[Task], filters: TaskFilters) -> list[Task]:
    """Return the tasks satisfying every criteria field, in input order."""
    filtered = list(tasks)

    if filters.status:
        filtered = [task for task in filtered if task.status in filters.status]

    if filters.priority:
        filtered = [task for task in filtered if task.priority in filters.priority]

    if filters.assignees:
        filtered = [
            task
            for task in filtered
            if _intersects(task.assignee_ids, filters.assignees)
        ]

    if filters.tags:
        filtered = [task for task in filtered if _intersects(task.tag_ids, filters.tags)]

    if filters.project_id:
        filtered = [task for task in filtered if task.project_id == filters.project_id]

    if filters.date_range:
        filtered = [
            task for task in filtered if in_date_range(task.due_date, filters.date_range)
        ]

    if filters.search and filters.search.strip():
        filtered = [
            task
            for task in filtered
            if _matches_text(filters.search, task.title, task.description)
        ]

    return filtered


def filter_projects(
    projects: Sequence[Project], filters: ProjectFilters
) -> list[Project]:
    """Return the projects satisfying every criteria field, in input order."""
    filtered = list(projects)

    if filters.status:
        filtered = [project for project in filtered if project.status in filters.status]

    if filters.members:
        filtered = [
            project
            for project in filtered
            if _intersects(project.member_ids, filters.members)
        ]

    if filters.tags:
        filtered = [
            project for project in filtered if _intersects(project.tag_ids, filters.tags)
        ]

    if filters.progress_range:
        low, high = filters.progress_range.min, filters.progress_range.max
        filtered = [project for project in filtered if low <= project.progress <= high]

    if filters.date_range:
        filtered = [
            project
            for project in filtered
            if in_date_range(project.deadline, filters.date_range)
        ]

    if filters.search and filters.search.strip():
        filtered = [
            project
            for project in filtered
            if _matches_text(filters.search, project.name, project.description)
        ]

    return filtered


def calculate_stats(total: Sequence[Any], filtered: Sequence[Any]) -> FilterStats:
    """Summarize how many items a filter kept."""
    total_count = len(total)
    filtered_count = len(filtered)
    filter_rate = (filtered_count / total_count) * 100 if total_count > 0 else 0
    return FilterStats(
        total_count=total_count,
        filtered_count=filtered_count,
        # round half up
        filter_rate=int(filter_rate + 0.5),
    )


def _as_mapping(
    filters: TaskFilters | ProjectFilters | SearchFilters | Mapping[str, Any],
) -> Mapping[str, Any]:
    if isinstance(filters, Mapping):
        return filters
    return filters.model_dump()


def has_active_filters(
    filters: TaskFilters | ProjectFilters | SearchFilters | Mapping[str, Any],
) -> bool:
    """Tell whether any criteria would actually narrow a collection.

    True when a list field is non-empty, the date range has a bound, or the
    search text is not blank. Scalar fields such as ``project_id`` and
    ``progress_range`` do not count.
    """
    data = _as_mapping(filters)

    has_list_filters = any(
        isinstance(value, (list, tuple)) and len(value) > 0
        for name, value in data.items()
        if name not in ("search", "date_range")
    )

    date_range = data.get("date_range")
    if isinstance(date_range, DateRange):
        has_date_range = date_range.is_set
    elif isinstance(date_range, Mapping):
        has_date_range = (
            date_range.get("start") is not None or date_range.get("end") is not None
        )
    else:
        has_date_range = False

    search = data.get("search")
    has_search = isinstance(search, str) and search.strip() != ""

    return has_list_filters or has_date_range or has_search


def clear_filters(filter_type: PresetType | str) -> TaskFilters | ProjectFilters:
    """Return criteria with every field explicitly reset."""
    if PresetType(filter_type) == PresetType.TASK:
        return TaskFilters(
            status=[],
            priority=[],
            assignees=[],
            tags=[],
            date_range=DateRange(start=None, end=None),
            project_id=None,
            search="",
        )
    return ProjectFilters(
        status=[],
        members=[],
        tags=[],
        date_range=DateRange(start=None, end=None),
        progress_range=None,
        search="",
    )

"""Sorting for task and project collections plus saved sort preferences."""

import json
from collections.abc import Callable, Sequence
from datetime import datetime
from enum import Enum
from functools import cmp_to_key, lru_cache
from typing import Any

from pydantic import BaseModel, Field, ValidationError
from pyuca import Collator

from tasklens.config import get_settings
from tasklens.filters.models import PresetType
from tasklens.storage.base import KeyValueStore, StorageUnavailableError
from tasklens.tasks.models import Project, ProjectStatus, Task, TaskPriority, TaskStatus
from tasklens.utils.dates import to_timestamp
from tasklens.utils.mixins import LoggerMixin


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class TaskSortField(str, Enum):
    TITLE = "title"
    PRIORITY = "priority"
    DUE_DATE = "due_date"
    STATUS = "status"
    ASSIGNEE = "assignee"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


class ProjectSortField(str, Enum):
    NAME = "name"
    PROGRESS = "progress"
    DEADLINE = "deadline"
    STATUS = "status"
    MEMBERS = "members"
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"


class SortConfig(BaseModel):
    """Field to sort on and in which direction."""

    field: str
    direction: SortDirection = SortDirection.ASC


class SortPreference(BaseModel):
    """Sort configuration remembered for one entity type."""

    type: PresetType
    config: SortConfig
    updated_at: datetime = Field(default_factory=datetime.now)


PRIORITY_VALUES: dict[str, int] = {
    TaskPriority.URGENT.value: 4,
    TaskPriority.HIGH.value: 3,
    TaskPriority.MEDIUM.value: 2,
    TaskPriority.LOW.value: 1,
}

TASK_STATUS_VALUES: dict[str, int] = {
    TaskStatus.TODO.value: 1,
    TaskStatus.IN_PROGRESS.value: 2,
    TaskStatus.REVIEW.value: 3,
    TaskStatus.DONE.value: 4,
}

PROJECT_STATUS_VALUES: dict[str, int] = {
    ProjectStatus.ACTIVE.value: 1,
    ProjectStatus.ON_HOLD.value: 2,
    ProjectStatus.COMPLETED.value: 3,
    ProjectStatus.ARCHIVED.value: 4,
}

_MISSING_DATE = float("inf")


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def _compare(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


@lru_cache(maxsize=1)
def _collator() -> Collator:
    return Collator()


def compare_text(a: str, b: str) -> int:
    """Locale-aware text comparison using the Unicode collation order.

    Accented letters sort beside their base letter and ``Đ`` sorts after
    ``D``. Collation ties fall back to casefolded, then exact, text.
    """
    collator = _collator()
    return (
        _compare(collator.sort_key(a), collator.sort_key(b))
        or _compare(a.casefold(), b.casefold())
        or _compare(a, b)
    )


def _date_or_last(value: datetime | None) -> float:
    stamp = to_timestamp(value)
    return _MISSING_DATE if stamp is None else stamp


def _task_comparison(field: str) -> Callable[[Task, Task], int]:
    def rank(mapping: dict[str, int], value: Any) -> int:
        return mapping.get(_enum_value(value), 0)

    comparisons: dict[str, Callable[[Task, Task], int]] = {
        TaskSortField.TITLE.value: lambda a, b: compare_text(a.title, b.title),
        TaskSortField.PRIORITY.value: lambda a, b: _compare(
            rank(PRIORITY_VALUES, a.priority), rank(PRIORITY_VALUES, b.priority)
        ),
        TaskSortField.DUE_DATE.value: lambda a, b: _compare(
            _date_or_last(a.due_date), _date_or_last(b.due_date)
        ),
        TaskSortField.STATUS.value: lambda a, b: _compare(
            rank(TASK_STATUS_VALUES, a.status), rank(TASK_STATUS_VALUES, b.status)
        ),
        TaskSortField.ASSIGNEE.value: lambda a, b: compare_text(
            a.assignees[0].name if a.assignees else "",
            b.assignees[0].name if b.assignees else "",
        ),
        TaskSortField.CREATED_AT.value: lambda a, b: _compare(
            _date_or_last(a.created_at), _date_or_last(b.created_at)
        ),
        TaskSortField.UPDATED_AT.value: lambda a, b: _compare(
            _date_or_last(a.updated_at), _date_or_last(b.updated_at)
        ),
    }
    return comparisons.get(field, lambda a, b: 0)


def _project_comparison(field: str) -> Callable[[Project, Project], int]:
    comparisons: dict[str, Callable[[Project, Project], int]] = {
        ProjectSortField.NAME.value: lambda a, b: compare_text(a.name, b.name),
        ProjectSortField.PROGRESS.value: lambda a, b: _compare(a.progress, b.progress),
        ProjectSortField.DEADLINE.value: lambda a, b: _compare(
            _date_or_last(a.deadline), _date_or_last(b.deadline)
        ),
        ProjectSortField.STATUS.value: lambda a, b: _compare(
            PROJECT_STATUS_VALUES.get(_enum_value(a.status), 0),
            PROJECT_STATUS_VALUES.get(_enum_value(b.status), 0),
        ),
        ProjectSortField.MEMBERS.value: lambda a, b: _compare(
            len(a.members), len(b.members)
        ),
        ProjectSortField.CREATED_AT.value: lambda a, b: _compare(
            _date_or_last(a.created_at), _date_or_last(b.created_at)
        ),
        ProjectSortField.UPDATED_AT.value: lambda a, b: _compare(
            _date_or_last(a.updated_at), _date_or_last(b.updated_at)
        ),
    }
    return comparisons.get(field, lambda a, b: 0)


def _sorted_with(items: Sequence[Any], comparison: Callable, direction: Any) -> list:
    multiplier = 1 if SortDirection(direction) == SortDirection.ASC else -1
    return sorted(items, key=cmp_to_key(lambda a, b: comparison(a, b) * multiplier))


def sort_tasks(tasks: Sequence[Task], config: SortConfig) -> list[Task]:
    """Return a new list of tasks ordered by ``config``; ties keep input order."""
    return _sorted_with(tasks, _task_comparison(config.field), config.direction)


def sort_projects(projects: Sequence[Project], config: SortConfig) -> list[Project]:
    """Return a new list of projects ordered by ``config``; ties keep input order."""
    return _sorted_with(projects, _project_comparison(config.field), config.direction)


def default_sort(sort_type: PresetType | str) -> SortConfig:
    if PresetType(sort_type) == PresetType.TASK:
        return SortConfig(field=TaskSortField.DUE_DATE.value, direction=SortDirection.ASC)
    return SortConfig(field=ProjectSortField.DEADLINE.value, direction=SortDirection.ASC)


def toggle_direction(direction: SortDirection | str) -> SortDirection:
    if SortDirection(direction) == SortDirection.ASC:
        return SortDirection.DESC
    return SortDirection.ASC


def sort_fields(sort_type: PresetType | str) -> list[str]:
    if PresetType(sort_type) == PresetType.TASK:
        return [field.value for field in TaskSortField]
    return [field.value for field in ProjectSortField]


class SortPreferenceStore(LoggerMixin):
    """Remembers the last sort configuration per entity type."""

    def __init__(self, backend: KeyValueStore, key_prefix: str | None = None):
        self.backend = backend
        self.key_prefix = key_prefix or get_settings().sort_preferences_key

    def _key(self, sort_type: PresetType | str) -> str:
        return f"{self.key_prefix}_{PresetType(sort_type).value}"

    def get(self, sort_type: PresetType | str) -> SortConfig | None:
        """Return the saved configuration, or ``None`` if there is none."""
        key = self._key(sort_type)
        try:
            stored = self.backend.get_item(key)
        except StorageUnavailableError:
            self.logger.warning("Storage backend unavailable", key=key)
            return None
        if not stored:
            return None
        try:
            return SortPreference.model_validate(json.loads(stored)).config
        except (json.JSONDecodeError, ValidationError) as e:
            self.logger.error("Failed to load sort preference", key=key, error=str(e))
            return None

    def save(self, sort_type: PresetType | str, config: SortConfig) -> None:
        preference = SortPreference(type=PresetType(sort_type), config=config)
        key = self._key(sort_type)
        try:
            self.backend.set_item(key, preference.model_dump_json())
        except StorageUnavailableError as e:
            self.logger.error("Failed to save sort preference", key=key, error=str(e))

    def clear(self, sort_type: PresetType | str) -> None:
        key = self._key(sort_type)
        try:
            self.backend.remove_item(key)
        except StorageUnavailableError as e:
            self.logger.error("Failed to clear sort preference", key=key, error=str(e))

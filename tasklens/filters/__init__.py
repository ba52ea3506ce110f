"""Structured filtering, sorting and filter presets."""

from tasklens.filters.models import (
    DateRange,
    FilterPreset,
    FilterStats,
    InvalidPresetError,
    PresetType,
    ProgressRange,
    ProjectFilters,
    SearchFilters,
    TaskFilters,
)
from tasklens.filters.engine import (
    calculate_stats,
    clear_filters,
    filter_projects,
    filter_tasks,
    has_active_filters,
)
from tasklens.filters.sorting import (
    SortConfig,
    SortDirection,
    SortPreferenceStore,
    default_sort,
    sort_projects,
    sort_tasks,
    toggle_direction,
)
from tasklens.filters.presets import (
    DEFAULT_PRESET_IDS,
    PresetDraft,
    PresetStore,
    default_presets,
)

__all__ = [
    "DateRange",
    "ProgressRange",
    "TaskFilters",
    "ProjectFilters",
    "SearchFilters",
    "FilterPreset",
    "FilterStats",
    "PresetType",
    "InvalidPresetError",
    "filter_tasks",
    "filter_projects",
    "calculate_stats",
    "has_active_filters",
    "clear_filters",
    "SortConfig",
    "SortDirection",
    "SortPreferenceStore",
    "sort_tasks",
    "sort_projects",
    "default_sort",
    "toggle_direction",
    "PresetDraft",
    "PresetStore",
    "default_presets",
    "DEFAULT_PRESET_IDS",
]

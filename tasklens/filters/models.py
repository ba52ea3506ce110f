"""Filter criteria, presets and statistics models."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, model_validator

from tasklens.tasks.models import ProjectStatus, TaskPriority, TaskStatus


class InvalidPresetError(ValueError):
    """Raised when a preset document cannot be parsed or is incomplete."""


class PresetType(str, Enum):
    """Entity kind a preset applies to."""

    TASK = "task"
    PROJECT = "project"


class DateRange(BaseModel):
    """Inclusive date window; either bound may be left open."""

    start: datetime | None = None
    end: datetime | None = None

    @property
    def is_set(self) -> bool:
        return self.start is not None or self.end is not None


class ProgressRange(BaseModel):
    """Inclusive progress percentage window."""

    min: int = Field(default=0, ge=0, le=100)
    max: int = Field(default=100, ge=0, le=100)


class TaskFilters(BaseModel):
    """Structured task criteria. ``None`` or empty fields do not constrain."""

    status: list[TaskStatus] | None = None
    priority: list[TaskPriority] | None = None
    assignees: list[str] | None = Field(None, description="User IDs")
    tags: list[str] | None = Field(None, description="Tag IDs")
    date_range: DateRange | None = None
    project_id: str | None = None
    search: str | None = None


class ProjectFilters(BaseModel):
    """Structured project criteria. ``None`` or empty fields do not constrain."""

    status: list[ProjectStatus] | None = None
    members: list[str] | None = Field(None, description="User IDs")
    tags: list[str] | None = Field(None, description="Tag IDs")
    date_range: DateRange | None = None
    progress_range: ProgressRange | None = None
    search: str | None = None


class SearchFilters(BaseModel):
    """Criteria applied to ranked search results through their metadata."""

    types: list[str] | None = Field(None, description="Result types, 'all' disables")
    status: list[str] | None = None
    priority: list[str] | None = None
    assignees: list[str] | None = Field(None, description="User IDs")
    tags: list[str] | None = Field(None, description="Tag IDs")
    date_range: DateRange | None = None


def coerce_preset_filters(data: Any) -> Any:
    """Parse a raw ``filters`` dict with the criteria class matching ``type``.

    Both criteria classes accept an all-optional dict, so the preset type
    has to pick the class.
    """
    if not isinstance(data, dict) or not isinstance(data.get("filters"), dict):
        return data
    preset_type = data.get("type")
    if isinstance(preset_type, PresetType):
        preset_type = preset_type.value
    filters_cls = ProjectFilters if preset_type == PresetType.PROJECT.value else TaskFilters
    return {**data, "filters": filters_cls.model_validate(data["filters"])}


class FilterPreset(BaseModel):
    """Named, reusable filter bundle."""

    id: str = Field(..., description="Unique preset ID")
    name: str = Field(..., min_length=1)
    type: PresetType
    filters: TaskFilters | ProjectFilters
    icon: str | None = None
    color: str | None = None
    is_default: bool = False
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="before")
    @classmethod
    def parse_filters_by_type(cls, data: Any) -> Any:
        return coerce_preset_filters(data)


class FilterStats(BaseModel):
    """How much of a collection survived filtering."""

    total_count: int = 0
    filtered_count: int = 0
    filter_rate: int = Field(default=0, description="Rounded percentage kept")

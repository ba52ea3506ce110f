"""Named filter presets: built-in defaults plus user presets kept in a store."""

from __future__ import annotations

import json
import secrets
import string
import time
from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator

from tasklens.config import get_settings
from tasklens.filters.models import (
    DateRange,
    FilterPreset,
    InvalidPresetError,
    PresetType,
    ProgressRange,
    ProjectFilters,
    TaskFilters,
    coerce_preset_filters,
)
from tasklens.storage.base import (
    JsonCollectionStore,
    KeyValueStore,
    StorageUnavailableError,
    StoreSnapshot,
    StoreStatus,
)
from tasklens.tasks.models import ProjectStatus, TaskPriority, TaskStatus
from tasklens.utils.error_handler import critical_operation, safe_with_default

DEFAULT_PRESET_IDS: frozenset[str] = frozenset(
    {
        "default_my_tasks",
        "default_urgent_tasks",
        "default_due_soon",
        "default_active_projects",
        "default_behind_schedule",
    }
)

# Fields a caller may change through ``PresetStore.update``
_UPDATABLE_FIELDS = ("name", "type", "filters", "icon", "color")

_ID_ALPHABET = string.ascii_lowercase + string.digits


class PresetDraft(BaseModel):
    """Preset content before the store assigns an ID and timestamps."""

    name: str = Field(..., min_length=1)
    type: PresetType
    filters: TaskFilters | ProjectFilters
    icon: str | None = None
    color: str | None = None

    @model_validator(mode="before")
    @classmethod
    def parse_filters_by_type(cls, data: Any) -> Any:
        return coerce_preset_filters(data)


def _new_preset_id() -> str:
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"preset_{int(time.time() * 1000)}_{suffix}"


def default_presets(now: datetime | None = None) -> list[FilterPreset]:
    """Build the built-in presets.

    A new list is produced on every call, with ``now`` used for timestamps
    and for the due-soon window.
    """
    now = now or datetime.now()
    active_task_statuses = [TaskStatus.TODO, TaskStatus.IN_PROGRESS]

    def preset(
        preset_id: str,
        name: str,
        preset_type: PresetType,
        filters: TaskFilters | ProjectFilters,
        icon: str,
        color: str,
    ) -> FilterPreset:
        return FilterPreset(
            id=preset_id,
            name=name,
            type=preset_type,
            filters=filters,
            icon=icon,
            color=color,
            is_default=True,
            created_at=now,
            updated_at=now,
        )

    return [
        preset(
            "default_my_tasks",
            "Công việc của tôi",
            PresetType.TASK,
            TaskFilters(status=list(active_task_statuses)),
            "User",
            "blue",
        ),
        preset(
            "default_urgent_tasks",
            "Ưu tiên cao",
            PresetType.TASK,
            TaskFilters(
                priority=[TaskPriority.HIGH, TaskPriority.URGENT],
                status=list(active_task_statuses),
            ),
            "AlertCircle",
            "red",
        ),
        preset(
            "default_due_soon",
            "Sắp hết hạn",
            PresetType.TASK,
            TaskFilters(
                status=list(active_task_statuses),
                date_range=DateRange(start=now, end=now + timedelta(days=7)),
            ),
            "Clock",
            "orange",
        ),
        preset(
            "default_active_projects",
            "Dự án đang hoạt động",
            PresetType.PROJECT,
            ProjectFilters(status=[ProjectStatus.ACTIVE]),
            "FolderKanban",
            "green",
        ),
        preset(
            "default_behind_schedule",
            "Chậm tiến độ",
            PresetType.PROJECT,
            ProjectFilters(
                status=[ProjectStatus.ACTIVE],
                progress_range=ProgressRange(min=0, max=50),
            ),
            "TrendingDown",
            "red",
        ),
    ]


class PresetStore(JsonCollectionStore):
    """User filter presets persisted as one JSON array.

    Defaults are never written to the store and cannot be updated or
    deleted. Each write replaces the whole collection, so concurrent writers
    race with last-write-wins semantics.
    """

    def __init__(self, backend: KeyValueStore, key: str | None = None):
        super().__init__(backend, key or get_settings().presets_key)

    def read(self) -> StoreSnapshot[FilterPreset]:
        """Load user presets only, reporting whether the backend answered."""
        raw = self.read_raw()
        presets: list[FilterPreset] = []
        for item in raw.items:
            try:
                preset = FilterPreset.model_validate(item)
            except ValidationError as e:
                self.logger.warning("Skipping invalid preset", error=str(e))
                continue
            if preset.is_default or preset.id in DEFAULT_PRESET_IDS:
                continue
            presets.append(preset)
        status = raw.status
        if status == StoreStatus.OK and not presets:
            status = StoreStatus.EMPTY
        return StoreSnapshot(items=presets, status=status)

    def user_presets(self) -> list[FilterPreset]:
        return self.read().items

    def list(self) -> list[FilterPreset]:
        """Defaults followed by user presets."""
        return [*default_presets(), *self.user_presets()]

    def list_by_type(self, preset_type: PresetType | str) -> list[FilterPreset]:
        wanted = PresetType(preset_type)
        return [preset for preset in self.list() if preset.type == wanted]

    def get(self, preset_id: str) -> FilterPreset | None:
        for preset in self.list():
            if preset.id == preset_id:
                return preset
        return None

    def _write(self, presets: list[FilterPreset]) -> None:
        self.write_raw([preset.model_dump(mode="json") for preset in presets])

    @critical_operation("save filter preset")
    def save(self, draft: PresetDraft | Mapping[str, Any]) -> FilterPreset:
        """Store a new user preset and return it with its generated ID."""
        if not isinstance(draft, PresetDraft):
            draft = PresetDraft.model_validate(draft)

        snapshot = self.read()
        if not snapshot.available:
            raise StorageUnavailableError("Cannot save preset without a storage backend")

        now = datetime.now()
        preset = FilterPreset(
            id=_new_preset_id(),
            name=draft.name,
            type=draft.type,
            filters=draft.filters,
            icon=draft.icon,
            color=draft.color,
            is_default=False,
            created_at=now,
            updated_at=now,
        )
        self._write([*snapshot.items, preset])

        self.logger.info(
            "Filter preset saved",
            preset_id=preset.id,
            name=preset.name,
            preset_type=preset.type.value,
        )
        return preset

    @safe_with_default("update filter preset", None)
    def update(self, preset_id: str, changes: Mapping[str, Any]) -> FilterPreset | None:
        """Merge ``changes`` into a user preset.

        Returns ``None`` for unknown IDs and for defaults.
        """
        snapshot = self.read()
        if not snapshot.available:
            return None

        presets = snapshot.items
        index = next(
            (i for i, preset in enumerate(presets) if preset.id == preset_id), None
        )
        if index is None:
            return None

        current = presets[index]
        merged = current.model_dump()
        for field in _UPDATABLE_FIELDS:
            if field in changes:
                value = changes[field]
                merged[field] = value.model_dump() if isinstance(value, BaseModel) else value
        merged["updated_at"] = datetime.now()

        updated = FilterPreset.model_validate(merged)
        presets[index] = updated
        self._write(presets)

        self.logger.info(
            "Filter preset updated",
            preset_id=preset_id,
            fields=[field for field in _UPDATABLE_FIELDS if field in changes],
        )
        return updated

    @safe_with_default("delete filter preset", False)
    def delete(self, preset_id: str) -> bool:
        """Remove a user preset. Unknown and default IDs are a no-op."""
        snapshot = self.read()
        if not snapshot.available:
            return False

        remaining = [preset for preset in snapshot.items if preset.id != preset_id]
        self._write(remaining)

        if len(remaining) != len(snapshot.items):
            self.logger.info("Filter preset deleted", preset_id=preset_id)
        return True

    @staticmethod
    def export(preset: FilterPreset) -> str:
        """Serialize a preset for sharing."""
        return preset.model_dump_json(indent=2)

    def import_json(self, document: str) -> FilterPreset:
        """Save the preset described by ``document`` as a new user preset.

        Raises:
            InvalidPresetError: ``document`` is not JSON or lacks name, type
                or filters.
        """
        try:
            data = json.loads(document)
        except (json.JSONDecodeError, TypeError) as e:
            raise InvalidPresetError("Invalid preset format") from e

        if not isinstance(data, dict):
            raise InvalidPresetError("Invalid preset format")
        missing = [
            field for field in ("name", "type", "filters") if data.get(field) is None
        ]
        if missing:
            raise InvalidPresetError(f"Preset is missing {', '.join(missing)}")

        try:
            draft = PresetDraft.model_validate(
                {field: data.get(field) for field in _UPDATABLE_FIELDS}
            )
        except ValidationError as e:
            raise InvalidPresetError("Invalid preset format") from e

        return self.save(draft)

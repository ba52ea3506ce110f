"""Test structured task and project filtering."""

from datetime import datetime

import pytest

from tasklens.filters import (
    DateRange,
    ProgressRange,
    ProjectFilters,
    TaskFilters,
    calculate_stats,
    clear_filters,
    filter_projects,
    filter_tasks,
    has_active_filters,
)
from tasklens.filters.engine import in_date_range


def _ids(items):
    return [item.id for item in items]


class TestFilterTasks:
    """Test task filtering semantics."""

    def test_empty_filters_keep_everything(self, tasks):
        """Test unset criteria do not constrain the collection."""
        assert _ids(filter_tasks(tasks, TaskFilters())) == [
            "task-1",
            "task-2",
            "task-3",
            "task-4",
        ]

    def test_empty_lists_do_not_constrain(self, tasks):
        """Test empty lists behave like unset fields."""
        filters = TaskFilters(status=[], priority=[], assignees=[], tags=[])
        assert len(filter_tasks(tasks, filters)) == 4

    def test_status_is_or_within_field(self, tasks):
        """Test any listed status is accepted."""
        filters = TaskFilters(status=["todo", "in_progress"])
        assert _ids(filter_tasks(tasks, filters)) == ["task-1", "task-2", "task-4"]

    def test_fields_are_and_combined(self, tasks):
        """Test every set field must hold."""
        filters = TaskFilters(status=["todo", "in_progress"], priority=["urgent"])
        assert _ids(filter_tasks(tasks, filters)) == ["task-4"]

    def test_assignees_match_any_assigned_user(self, tasks):
        """Test a task matches when one of its assignees is listed."""
        assert _ids(filter_tasks(tasks, TaskFilters(assignees=["u3"]))) == ["task-3"]
        assert _ids(filter_tasks(tasks, TaskFilters(assignees=["u1", "u2"]))) == [
            "task-1",
            "task-2",
            "task-3",
        ]

    def test_tags_by_id(self, tasks):
        """Test tag criteria compare tag IDs."""
        assert _ids(filter_tasks(tasks, TaskFilters(tags=["t-frontend"]))) == [
            "task-2"
        ]

    def test_project_id(self, tasks):
        """Test the project criteria is an exact match."""
        assert _ids(filter_tasks(tasks, TaskFilters(project_id="p1"))) == [
            "task-1",
            "task-3",
        ]

    def test_date_range_is_inclusive_and_drops_undated(self, tasks):
        """Test due dates on the bounds pass and tasks without one do not."""
        filters = TaskFilters(
            date_range=DateRange(
                start=datetime(2026, 3, 10), end=datetime(2026, 3, 20)
            )
        )
        assert _ids(filter_tasks(tasks, filters)) == ["task-1", "task-2"]

    def test_open_date_range_bound(self, tasks):
        """Test a range with only an end bound."""
        filters = TaskFilters(date_range=DateRange(end=datetime(2026, 3, 1)))
        assert _ids(filter_tasks(tasks, filters)) == ["task-3"]

    def test_unset_date_range_keeps_undated_tasks(self, tasks):
        """Test a range without bounds does not constrain."""
        filters = TaskFilters(date_range=DateRange())
        assert "task-4" in _ids(filter_tasks(tasks, filters))

    def test_search_is_case_insensitive_substring(self, tasks):
        """Test text search looks at title and description."""
        filters = TaskFilters(search="LOGIN")
        assert _ids(filter_tasks(tasks, filters)) == ["task-1", "task-3"]

    def test_blank_search_does_not_constrain(self, tasks):
        """Test whitespace search text is ignored."""
        assert len(filter_tasks(tasks, TaskFilters(search="   "))) == 4

    def test_input_is_not_mutated(self, tasks):
        """Test filtering returns a new list."""
        original = list(tasks)
        filter_tasks(tasks, TaskFilters(status=["done"]))
        assert tasks == original


class TestFilterProjects:
    """Test project filtering semantics."""

    def test_status(self, projects):
        """Test status criteria."""
        assert _ids(filter_projects(projects, ProjectFilters(status=["active"]))) == [
            "p1"
        ]

    def test_members_accept_ids_and_member_objects(self, projects):
        """Test members are matched by ID in both stored shapes."""
        assert _ids(filter_projects(projects, ProjectFilters(members=["u2"]))) == ["p1"]
        assert _ids(filter_projects(projects, ProjectFilters(members=["u3"]))) == ["p2"]

    def test_progress_range_is_inclusive(self, projects):
        """Test both progress bounds are inclusive."""
        filters = ProjectFilters(progress_range=ProgressRange(min=40, max=75))
        assert _ids(filter_projects(projects, filters)) == ["p1", "p2"]

    def test_deadline_range_drops_projects_without_deadline(self, projects):
        """Test the date range checks the deadline."""
        filters = ProjectFilters(date_range=DateRange(end=datetime(2026, 1, 1)))
        assert _ids(filter_projects(projects, filters)) == ["p3"]

    def test_search_name_and_description(self, projects):
        """Test text search looks at name and description."""
        assert _ids(filter_projects(projects, ProjectFilters(search="android"))) == [
            "p2"
        ]
        assert _ids(filter_projects(projects, ProjectFilters(search="data"))) == ["p3"]


class TestInDateRange:
    """Test the inclusive date check."""

    def test_missing_range_accepts_anything(self):
        assert in_date_range(None, None)
        assert in_date_range(datetime(2026, 1, 1), None)

    def test_missing_date_rejected_by_bounded_range(self):
        assert not in_date_range(None, DateRange(start=datetime(2026, 1, 1)))

    def test_bounds(self):
        window = DateRange(start=datetime(2026, 1, 1), end=datetime(2026, 1, 31))
        assert in_date_range(datetime(2026, 1, 1), window)
        assert in_date_range(datetime(2026, 1, 31), window)
        assert not in_date_range(datetime(2026, 2, 1), window)


class TestCalculateStats:
    """Test filter statistics."""

    @pytest.mark.parametrize(
        ("total", "kept", "rate"),
        [(4, 2, 50), (3, 1, 33), (3, 2, 67), (8, 1, 13), (0, 0, 0), (5, 5, 100)],
    )
    def test_rate_is_rounded_percentage(self, total, kept, rate):
        """Test the rate rounds half up."""
        stats = calculate_stats(list(range(total)), list(range(kept)))

        assert stats.total_count == total
        assert stats.filtered_count == kept
        assert stats.filter_rate == rate


class TestActiveFilters:
    """Test active filter detection and reset."""

    @pytest.mark.parametrize(
        "filters",
        [
            {},
            {"search": "  "},
            {"status": []},
            {"date_range": {"start": None, "end": None}},
            {"project_id": "p1"},
            TaskFilters(),
            TaskFilters(date_range=DateRange()),
            ProjectFilters(progress_range=ProgressRange()),
        ],
    )
    def test_inactive(self, filters):
        """Test criteria that would not narrow anything."""
        assert has_active_filters(filters) is False

    @pytest.mark.parametrize(
        "filters",
        [
            {"status": ["todo"]},
            {"search": "x"},
            {"date_range": {"start": "2026-01-01"}},
            TaskFilters(tags=["t-backend"]),
            ProjectFilters(date_range=DateRange(end=datetime(2026, 1, 1))),
        ],
    )
    def test_active(self, filters):
        """Test criteria that narrow a collection."""
        assert has_active_filters(filters) is True

    def test_clear_task_filters(self):
        """Test the reset task criteria shape."""
        cleared = clear_filters("task")

        assert isinstance(cleared, TaskFilters)
        assert cleared.status == []
        assert cleared.priority == []
        assert cleared.assignees == []
        assert cleared.tags == []
        assert cleared.date_range.is_set is False
        assert cleared.project_id is None
        assert cleared.search == ""
        assert has_active_filters(cleared) is False

    def test_clear_project_filters(self):
        """Test the reset project criteria shape."""
        cleared = clear_filters("project")

        assert isinstance(cleared, ProjectFilters)
        assert cleared.members == []
        assert cleared.progress_range is None
        assert has_active_filters(cleared) is False

"""Test the search entry point."""

import pytest

from tasklens.config import override_settings
from tasklens.filters import SearchFilters
from tasklens.search import SearchEngine, SearchOptions
from tasklens.storage import HistoryStore


@pytest.fixture
def history(memory_store):
    return HistoryStore(memory_store)


@pytest.fixture
def engine(history):
    return SearchEngine(history=history)


def _ids(response):
    return [r.id for r in response.results]


class TestSearchEngine:
    """Test ranking, composition, pagination and history recording."""

    def test_login_search(self, engine, tasks, projects, users):
        """Test the end-to-end login query."""
        response = engine.search(SearchOptions(query="login"), tasks, projects, users)

        assert _ids(response) == ["task-1", "task-3", "p1"]
        assert response.total_results == 3
        assert response.results[0].score == 70
        assert response.results[0].highlights[0].indices == [(4, 9)]

    def test_pagination(self, engine, tasks, projects, users):
        """Test total counts every match while results hold one page."""
        response = engine.search(
            SearchOptions(query="login", limit=1, offset=1), tasks, projects, users
        )

        assert _ids(response) == ["task-3"]
        assert response.total_results == 3

    def test_offset_past_end(self, engine, tasks):
        response = engine.search(SearchOptions(query="login", offset=10), tasks)

        assert response.results == []
        assert response.total_results == 2

    def test_default_page_size_from_settings(self, engine, tasks, projects, users):
        """Test requests without a limit use the configured page size."""
        with override_settings(default_search_limit=2):
            options = SearchOptions(query="login")

        response = engine.search(options, tasks, projects, users)

        assert options.limit == 2
        assert _ids(response) == ["task-1", "task-3"]
        assert response.total_results == 3

    def test_default_page_size(self):
        assert SearchOptions(query="x").limit == 20

    def test_filters_and_sort(self, engine, tasks, projects, users):
        options = SearchOptions(
            query="login",
            filters=SearchFilters(types=["task"]),
            sort_by="title",
            sort_order="asc",
        )

        response = engine.search(options, tasks, projects, users)

        assert [r.title for r in response.results] == [
            "Fix login bug",
            "Write release notes",
        ]

    def test_records_history(self, engine, history, tasks, projects):
        """Test each search is recorded with its filters and total."""
        engine.search(
            SearchOptions(query="login", filters=SearchFilters(priority=["high"])),
            tasks,
            projects,
        )

        entry = history.entries()[0]
        assert entry.query == "login"
        assert entry.result_count == 1
        assert entry.filters.priority == ["high"]

    def test_blank_query(self, engine, history, tasks):
        """Test a blank query returns nothing and is not recorded."""
        response = engine.search(SearchOptions(query="   "), tasks)

        assert response.results == []
        assert response.total_results == 0
        assert history.entries() == []

    def test_suggestions_and_clear(self, engine, tasks):
        engine.search(SearchOptions(query="overdue report"), tasks)

        assert engine.suggestions("over") == ["overdue report", "overdue tasks"]

        engine.clear_history()
        assert engine.suggestions("") == []

    def test_without_history(self, tasks):
        engine = SearchEngine()

        response = engine.search(SearchOptions(query="login"), tasks)

        assert response.total_results == 2
        assert engine.suggestions("") == []
        engine.clear_history()

    def test_to_dict(self, engine, tasks):
        data = engine.search(SearchOptions(query="fix login bug"), tasks).to_dict()

        assert data["query"] == "fix login bug"
        first = data["results"][0]
        assert first["id"] == "task-1"
        assert first["type"] == "task"
        assert first["score"] == 100
        assert first["highlights"][0]["indices"] == [[0, 13]]

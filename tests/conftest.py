"""
Shared fixtures and collection settings.

- Adds the project root to ``sys.path`` so ``import tasklens.*`` resolves
- Isolates settings from the developer's environment for every test
- Provides small in-memory entity collections
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

import pytest

# Project root (parent of this file's directory)
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(autouse=True)
def _test_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Point settings at a throwaway directory and reset the settings cache."""
    from tasklens.config import clear_settings_cache

    env: dict[str, str] = {
        "TASKLENS_ENVIRONMENT": "testing",
        "TASKLENS_STORAGE_DIR": str(tmp_path / "storage"),
        "TASKLENS_LOG_DIR": str(tmp_path / "logs"),
    }
    for k, v in env.items():
        monkeypatch.setenv(k, v)

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def memory_store():
    from tasklens.storage import InMemoryStore

    return InMemoryStore()


@pytest.fixture
def unavailable_store():
    from tasklens.storage import UnavailableStore

    return UnavailableStore()


@pytest.fixture
def users():
    from tasklens.tasks import User

    return [
        User(id="u1", name="Alice Nguyen", email="alice@example.com", role="Designer"),
        User(id="u2", name="Bob Tran", email="bob@example.com", role="Developer"),
        User(id="u3", name="Carol Le", email="carol.le@example.com"),
    ]


@pytest.fixture
def tasks(users):
    from tasklens.tasks import Tag, Task, TaskPriority, TaskStatus

    backend = Tag(id="t-backend", name="backend")
    frontend = Tag(id="t-frontend", name="frontend")

    return [
        Task(
            id="task-1",
            title="Fix login bug",
            description="auth issue",
            status=TaskStatus.IN_PROGRESS,
            priority=TaskPriority.HIGH,
            assignees=[users[0]],
            project_id="p1",
            due_date=datetime(2026, 3, 10),
            tags=[backend],
        ),
        Task(
            id="task-2",
            title="Design homepage",
            status=TaskStatus.TODO,
            priority=TaskPriority.MEDIUM,
            assignees=[users[1]],
            project_id="p2",
            due_date=datetime(2026, 3, 20),
            tags=[frontend],
        ),
        Task(
            id="task-3",
            title="Write release notes",
            description="summarize login changes",
            status=TaskStatus.DONE,
            priority=TaskPriority.LOW,
            assignees=[users[0], users[2]],
            project_id="p1",
            due_date=datetime(2026, 2, 1),
        ),
        Task(
            id="task-4",
            title="Plan sprint",
            status=TaskStatus.TODO,
            priority=TaskPriority.URGENT,
        ),
    ]


@pytest.fixture
def projects():
    from tasklens.tasks import Project, ProjectMember, ProjectStatus, Tag

    return [
        Project(
            id="p1",
            name="Website Redesign",
            description="New landing pages and login flow",
            status=ProjectStatus.ACTIVE,
            progress=40,
            members=["u1", ProjectMember(id="u2", name="Bob Tran")],
            deadline=datetime(2026, 4, 1),
            tags=[Tag(id="t-frontend", name="frontend")],
        ),
        Project(
            id="p2",
            name="Mobile App",
            description="iOS and Android clients",
            status=ProjectStatus.ON_HOLD,
            progress=75,
            members=["u3"],
        ),
        Project(
            id="p3",
            name="Data Warehouse",
            status=ProjectStatus.COMPLETED,
            progress=100,
            members=[],
            deadline=datetime(2025, 12, 31),
        ),
    ]

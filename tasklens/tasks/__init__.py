"""Domain entities the search and filter engine operates on."""

from tasklens.tasks.models import (
    Project,
    ProjectMember,
    ProjectStatus,
    Tag,
    Task,
    TaskPriority,
    TaskStatus,
    User,
)

__all__ = [
    "Task",
    "TaskStatus",
    "TaskPriority",
    "Project",
    "ProjectStatus",
    "ProjectMember",
    "Tag",
    "User",
]

"""Task management data models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator


class TaskStatus(str, Enum):
    """Task status enum."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    DONE = "done"


class TaskPriority(str, Enum):
    """Task priority enum."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class ProjectStatus(str, Enum):
    """Project status enum."""

    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"
    ON_HOLD = "on-hold"


class User(BaseModel):
    """User data model."""

    id: str = Field(..., description="Unique user ID")
    name: str = Field(..., description="Display name")
    email: str = Field(default="", description="Email address")
    avatar_url: str | None = Field(None, description="Avatar image URL")
    role: str | None = Field(None, description="Job title shown next to the name")
    department: str | None = None
    bio: str | None = None


class Tag(BaseModel):
    """Tag data model."""

    id: str = Field(..., description="Unique tag ID")
    name: str = Field(..., description="Tag label")
    color: str | None = None


class ProjectMember(BaseModel):
    """Member entry embedded in a project."""

    id: str = Field(..., description="User ID of the member")
    name: str | None = None
    avatar: str | None = None
    role: str = Field(default="member", description="owner, admin or member")


class Task(BaseModel):
    """Task data model."""

    id: str = Field(..., description="Unique task ID")
    title: str = Field(..., description="Task title")
    description: str | None = Field(None, description="Task description")
    status: TaskStatus = Field(default=TaskStatus.TODO)
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM)
    assignees: list[User] = Field(default_factory=list, description="Assigned users")
    project_id: str | None = Field(None, description="Owning project ID")
    due_date: datetime | None = Field(None, description="Task due date")
    tags: list[Tag] = Field(default_factory=list, description="Task tags")
    estimated_hours: float | None = Field(
        None, description="Estimated hours to complete", gt=0
    )
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def assignee_ids(self) -> list[str]:
        return [assignee.id for assignee in self.assignees]

    @property
    def tag_ids(self) -> list[str]:
        return [tag.id for tag in self.tags]


class Project(BaseModel):
    """Project data model."""

    id: str = Field(..., description="Unique project ID")
    name: str = Field(..., description="Project name")
    description: str | None = Field(None, description="Project description")
    status: ProjectStatus = Field(default=ProjectStatus.ACTIVE)
    progress: int = Field(default=0, description="Progress percentage", ge=0, le=100)
    members: list[ProjectMember | str] = Field(
        default_factory=list, description="Member IDs or embedded member entries"
    )
    deadline: datetime | None = Field(None, description="Project deadline")
    tags: list[Tag] = Field(default_factory=list, description="Project tags")
    color: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @field_validator("progress")
    @classmethod
    def validate_progress(cls, v: int) -> int:
        """Validate progress is between 0 and 100."""
        if not 0 <= v <= 100:
            raise ValueError("Progress must be between 0 and 100")
        return v

    @property
    def member_ids(self) -> list[str]:
        """IDs of all members, whether stored as plain IDs or embedded entries."""
        return [
            member.id if isinstance(member, ProjectMember) else member
            for member in self.members
        ]

    @property
    def tag_ids(self) -> list[str]:
        return [tag.id for tag in self.tags]

"""Pydantic models for task API."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import Field, field_validator, model_validator

from ..utils import to_utc
from .category import CategorySummary
from .common import CamelModel, Pagination, RequestModel
from .user import UserSummary


class TaskStatus(str, Enum):
    """Task status enumeration."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class TaskPriority(str, Enum):
    """Task priority enumeration."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def _future_due_date(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    value = to_utc(value)
    if value <= datetime.now(timezone.utc):
        raise ValueError("Due date must be in the future")
    return value


class TaskCreate(RequestModel):
    """Request model for creating a task."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=1000)
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None
    category: str | None = None
    tags: list[str] = Field(default_factory=list)
    estimated_hours: float | None = Field(None, ge=0)

    @field_validator("due_date")
    @classmethod
    def due_date_in_future(cls, value: datetime | None) -> datetime | None:
        return _future_due_date(value)


# Fields that may be omitted from an update but never set to null.
NON_NULLABLE_UPDATE_FIELDS = ("title", "status", "priority", "tags")


class TaskUpdate(RequestModel):
    """Request model for updating a task.

    Only fields present in the request body are applied; sending
    `"category": null` detaches the task from its category.
    """

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=1000)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None
    category: str | None = None
    tags: list[str] | None = None
    estimated_hours: float | None = Field(None, ge=0)

    @field_validator("due_date")
    @classmethod
    def due_date_in_future(cls, value: datetime | None) -> datetime | None:
        return _future_due_date(value)

    @model_validator(mode="after")
    def reject_nulls(self) -> "TaskUpdate":
        for name in NON_NULLABLE_UPDATE_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        """Return only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class TaskStatusUpdate(RequestModel):
    status: TaskStatus


class TaskPriorityUpdate(RequestModel):
    priority: TaskPriority


class TaskShareRequest(RequestModel):
    user_id: str = Field(..., min_length=1)


class TaskResponse(CamelModel):
    """Response model for a task."""

    id: str
    title: str
    description: str | None = None
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime | None = None
    category: CategorySummary | None = None
    tags: list[str] = Field(default_factory=list)
    estimated_hours: float | None = None
    user: str
    shared_with: list[str] = Field(default_factory=list)
    created_at: int
    updated_at: int


class SharedTaskResponse(TaskResponse):
    """A task someone else shared with the caller."""

    owner: UserSummary


class TaskData(CamelModel):
    task: TaskResponse


class TaskListData(CamelModel):
    """Response model for task list."""

    tasks: list[TaskResponse]
    pagination: Pagination
    stats: dict[str, int]


class SharedTaskListData(CamelModel):
    tasks: list[SharedTaskResponse]

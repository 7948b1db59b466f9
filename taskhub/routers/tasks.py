"""Task API router."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, status

from ..dependencies import get_current_user, get_task_service
from ..filters import DEFAULT_LIMIT, DEFAULT_PAGE, DEFAULT_SORT, TaskFilters
from ..models import (
    ApiResponse,
    SharedTaskListData,
    TaskCreate,
    TaskData,
    TaskListData,
    TaskPriority,
    TaskPriorityUpdate,
    TaskShareRequest,
    TaskStatusUpdate,
    TaskUpdate,
    UserPublic,
)
from ..services import TaskService

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


# =============================================================================
# Collection Endpoints - /shared/me must be defined BEFORE /{task_id} routes
# =============================================================================


@router.get("", response_model=ApiResponse[TaskListData])
def list_tasks(
    status: str | None = Query(None, description="Comma-separated statuses"),
    priority: TaskPriority | None = None,
    category: str | None = None,
    due_from: datetime | None = Query(None, alias="dueDate[gte]"),
    due_to: datetime | None = Query(None, alias="dueDate[lte]"),
    search: str | None = None,
    sort_by: str = Query(DEFAULT_SORT, alias="sortBy"),
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1),
    user: UserPublic = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    """Get a filtered, sorted page of the caller's tasks with status counts."""
    filters = TaskFilters(
        status=status,
        priority=priority.value if priority else None,
        category=category,
        due_from=due_from,
        due_to=due_to,
        search=search,
        sort_by=sort_by,
        page=page,
        limit=limit,
    )
    return ApiResponse(data=tasks.list_tasks(user.id, filters))


@router.get("/shared/me", response_model=ApiResponse[SharedTaskListData])
def list_shared_tasks(
    user: UserPublic = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    """Get tasks other users shared with the caller."""
    return ApiResponse(data=SharedTaskListData(tasks=tasks.list_shared_with_me(user.id)))


@router.post("", response_model=ApiResponse[TaskData], status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    user: UserPublic = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    """Create a new task."""
    task = tasks.create_task(user.id, task_data)
    return ApiResponse(message="Task created successfully", data=TaskData(task=task))


# =============================================================================
# Single Task Endpoints
# =============================================================================


@router.get("/{task_id}", response_model=ApiResponse[TaskData])
def get_task(
    task_id: str,
    user: UserPublic = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    """Get a task by ID."""
    return ApiResponse(data=TaskData(task=tasks.get_task(user.id, task_id)))


@router.put("/{task_id}", response_model=ApiResponse[TaskData])
def update_task(
    task_id: str,
    task_data: TaskUpdate,
    user: UserPublic = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    """Update the fields present in the body."""
    task = tasks.update_task(user.id, task_id, task_data)
    return ApiResponse(message="Task updated successfully", data=TaskData(task=task))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: str,
    user: UserPublic = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    """Delete a task."""
    tasks.delete_task(user.id, task_id)


@router.put("/{task_id}/status", response_model=ApiResponse[TaskData])
def update_task_status(
    task_id: str,
    body: TaskStatusUpdate,
    user: UserPublic = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    """Change a task's status; archived tasks stay archived."""
    task = tasks.set_status(user.id, task_id, body.status)
    return ApiResponse(message="Task status updated", data=TaskData(task=task))


@router.put("/{task_id}/priority", response_model=ApiResponse[TaskData])
def update_task_priority(
    task_id: str,
    body: TaskPriorityUpdate,
    user: UserPublic = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    task = tasks.set_priority(user.id, task_id, body.priority)
    return ApiResponse(message="Task priority updated", data=TaskData(task=task))


@router.post("/{task_id}/share", response_model=ApiResponse[TaskData])
def share_task(
    task_id: str,
    body: TaskShareRequest,
    user: UserPublic = Depends(get_current_user),
    tasks: TaskService = Depends(get_task_service),
):
    """Give another user read access to a task."""
    task = tasks.share_task(user.id, task_id, body.user_id)
    return ApiResponse(message="Task shared successfully", data=TaskData(task=task))

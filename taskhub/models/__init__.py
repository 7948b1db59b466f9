"""Models package."""

from .category import (
    CategoryCreate,
    CategoryData,
    CategoryListData,
    CategoryResponse,
    CategorySummary,
    CategoryUpdate,
)
from .common import ApiResponse, Pagination
from .task import (
    SharedTaskListData,
    SharedTaskResponse,
    TaskCreate,
    TaskData,
    TaskListData,
    TaskPriority,
    TaskPriorityUpdate,
    TaskResponse,
    TaskShareRequest,
    TaskStatus,
    TaskStatusUpdate,
    TaskUpdate,
)
from .user import (
    AuthData,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    Role,
    TokenPair,
    TokensData,
    UserData,
    UserPublic,
    UserSummary,
)

__all__ = [
    "ApiResponse",
    "Pagination",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CategorySummary",
    "CategoryData",
    "CategoryListData",
    "TaskStatus",
    "TaskPriority",
    "TaskCreate",
    "TaskUpdate",
    "TaskStatusUpdate",
    "TaskPriorityUpdate",
    "TaskShareRequest",
    "TaskResponse",
    "SharedTaskResponse",
    "TaskData",
    "TaskListData",
    "SharedTaskListData",
    "Role",
    "RegisterRequest",
    "LoginRequest",
    "RefreshRequest",
    "UserPublic",
    "UserSummary",
    "TokenPair",
    "AuthData",
    "TokensData",
    "UserData",
]

"""Use-case services."""

from .auth import AuthService
from .categories import CategoryService
from .tasks import TaskService

__all__ = ["AuthService", "CategoryService", "TaskService"]

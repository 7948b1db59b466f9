"""FastAPI dependencies: service lookup and the authorization gate."""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .container import Container
from .errors import ForbiddenError
from .models import Role, UserPublic
from .services import AuthService, CategoryService, TaskService

bearer = HTTPBearer(auto_error=False)


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_auth_service(container: Container = Depends(get_container)) -> AuthService:
    return container.auth_service


def get_task_service(container: Container = Depends(get_container)) -> TaskService:
    return container.task_service


def get_category_service(container: Container = Depends(get_container)) -> CategoryService:
    return container.category_service


def get_current_user(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    auth: AuthService = Depends(get_auth_service),
) -> UserPublic:
    """Resolve the bearer token; any failure is a plain 401."""
    token = creds.credentials if creds else None
    return auth.resolve_identity(token)


def require_roles(*roles: Role):
    """Dependency factory restricting a route to the given roles."""

    def checker(user: UserPublic = Depends(get_current_user)) -> UserPublic:
        if user.role not in roles:
            raise ForbiddenError(f"User role {user.role.value} is not authorized to access this route")
        return user

    return checker

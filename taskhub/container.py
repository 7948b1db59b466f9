"""Object graph built once per application."""

from dataclasses import dataclass

from .config import Settings
from .security import TokenService
from .services import AuthService, CategoryService, TaskService


@dataclass(frozen=True)
class Container:
    settings: Settings

    token_service: TokenService

    auth_service: AuthService
    task_service: TaskService
    category_service: CategoryService


def build_container(settings: Settings) -> Container:
    token_service = TokenService(
        access_secret=settings.access_token_secret,
        refresh_secret=settings.refresh_token_secret,
        access_ttl=settings.access_token_ttl,
        refresh_ttl=settings.refresh_token_ttl,
        algorithm=settings.jwt_algorithm,
    )

    auth_service = AuthService(
        settings.database_path,
        token_service,
        bcrypt_rounds=settings.bcrypt_rounds,
    )
    task_service = TaskService(settings.database_path)
    category_service = CategoryService(settings.database_path)

    return Container(
        settings=settings,
        token_service=token_service,
        auth_service=auth_service,
        task_service=task_service,
        category_service=category_service,
    )

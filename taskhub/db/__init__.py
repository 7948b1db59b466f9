"""Database package."""

from . import categories, tasks, users
from .client import get_connection, get_db, init_db

__all__ = [
    "init_db",
    "get_connection",
    "get_db",
    "users",
    "categories",
    "tasks",
]

"""API routers."""

from . import auth, categories, tasks

__all__ = ["auth", "categories", "tasks"]

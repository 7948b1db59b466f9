"""Category use cases."""

import logging
import sqlite3
from pathlib import Path

from .. import db
from ..errors import CategoryExistsError, CategoryNotFoundError
from ..models import CategoryCreate, CategoryResponse, CategoryUpdate
from ..utils import new_id, now_ts, parse_id

logger = logging.getLogger(__name__)


class CategoryService:
    """Use case: manage the caller's categories. Names are unique per user."""

    def __init__(self, db_path: Path):
        self._db_path = db_path

    def list_categories(self, user_id: str) -> list[CategoryResponse]:
        with db.get_db(self._db_path) as conn:
            categories = db.categories.list_categories(conn, user_id)
        return [CategoryResponse(**c) for c in categories]

    def get_category(self, user_id: str, category_id: str) -> CategoryResponse:
        category_id = parse_id(category_id)
        with db.get_db(self._db_path) as conn:
            category = db.categories.get_category(conn, category_id, user_id)
        if not category:
            raise CategoryNotFoundError()
        return CategoryResponse(**category)

    def create_category(self, user_id: str, data: CategoryCreate) -> CategoryResponse:
        category_id = new_id()
        with db.get_db(self._db_path, immediate=True) as conn:
            if db.categories.get_category_by_name(conn, user_id, data.name):
                raise CategoryExistsError()
            try:
                db.categories.insert_category(
                    conn,
                    category_id=category_id,
                    user_id=user_id,
                    name=data.name,
                    color=data.color,
                    created_at=now_ts(),
                )
            except sqlite3.IntegrityError as exc:
                raise CategoryExistsError() from exc
            category = db.categories.get_category(conn, category_id, user_id)

        logger.debug("Created category id=%s for user id=%s", category_id, user_id)
        return CategoryResponse(**category)

    def update_category(
        self, user_id: str, category_id: str, data: CategoryUpdate
    ) -> CategoryResponse:
        category_id = parse_id(category_id)
        changes = data.model_dump(exclude_none=True)

        with db.get_db(self._db_path, immediate=True) as conn:
            category = db.categories.get_category(conn, category_id, user_id)
            if not category:
                raise CategoryNotFoundError()
            name = changes.get("name")
            if name and name != category["name"]:
                if db.categories.get_category_by_name(conn, user_id, name):
                    raise CategoryExistsError()
            if changes:
                try:
                    db.categories.update_category(conn, category_id, user_id, changes, now_ts())
                except sqlite3.IntegrityError as exc:
                    raise CategoryExistsError() from exc
            category = db.categories.get_category(conn, category_id, user_id)

        return CategoryResponse(**category)

    def delete_category(self, user_id: str, category_id: str) -> None:
        """Delete a category and detach every task that referenced it."""
        category_id = parse_id(category_id)
        with db.get_db(self._db_path, immediate=True) as conn:
            if not db.categories.get_category(conn, category_id, user_id):
                raise CategoryNotFoundError()
            detached = db.tasks.clear_category(conn, category_id, user_id, now_ts())
            db.categories.delete_category(conn, category_id, user_id)

        logger.info(
            "Deleted category id=%s for user id=%s, detached %d task(s)",
            category_id,
            user_id,
            detached,
        )

"""Task use cases: CRUD, status rules, category counters and sharing."""

import logging
import math
import sqlite3
from pathlib import Path

from .. import db
from ..errors import (
    AlreadySharedError,
    CategoryNotFoundError,
    InvalidTransitionError,
    TaskNotFoundError,
    UserNotFoundError,
)
from ..filters import TaskFilters, build_task_query
from ..models import (
    Pagination,
    SharedTaskResponse,
    TaskCreate,
    TaskListData,
    TaskPriority,
    TaskResponse,
    TaskStatus,
    TaskUpdate,
)
from ..utils import new_id, now_ts, parse_id

logger = logging.getLogger(__name__)


def check_transition(current: str, requested: str) -> None:
    """Archived is terminal; re-archiving is allowed as a no-op."""
    if current == TaskStatus.ARCHIVED.value and requested != TaskStatus.ARCHIVED.value:
        raise InvalidTransitionError()


class TaskService:
    """Use case: manage the caller's tasks.

    Each write runs in one IMMEDIATE transaction, so the task row and the
    `task_count` of any category it leaves or joins change together.
    """

    def __init__(self, db_path: Path):
        self._db_path = db_path

    def _require_category(self, conn, category_id: str, user_id: str) -> str:
        category_id = parse_id(category_id)
        if not db.categories.get_category(conn, category_id, user_id):
            raise CategoryNotFoundError()
        return category_id

    def _require_task(self, conn, task_id: str, user_id: str) -> dict:
        task = db.tasks.get_task(conn, task_id, user_id)
        if not task:
            raise TaskNotFoundError()
        return task

    def list_tasks(self, user_id: str, filters: TaskFilters) -> TaskListData:
        query = build_task_query(user_id, filters)
        with db.get_db(self._db_path) as conn:
            tasks = db.tasks.find_tasks(conn, query)
            total = db.tasks.count_tasks(conn, query)
            # Over all of the user's tasks, not just the filtered ones.
            stats = db.tasks.count_by_status(conn, user_id)

        return TaskListData(
            tasks=[TaskResponse(**task) for task in tasks],
            pagination=Pagination(
                total=total,
                page=query.page,
                limit=query.limit,
                pages=math.ceil(total / query.limit),
            ),
            stats=stats,
        )

    def get_task(self, user_id: str, task_id: str) -> TaskResponse:
        task_id = parse_id(task_id)
        with db.get_db(self._db_path) as conn:
            task = self._require_task(conn, task_id, user_id)
        return TaskResponse(**task)

    def create_task(self, user_id: str, data: TaskCreate) -> TaskResponse:
        fields = data.model_dump(exclude_none=True, exclude={"category"})
        task_id = new_id()

        with db.get_db(self._db_path, immediate=True) as conn:
            if data.category:
                fields["category"] = self._require_category(conn, data.category, user_id)
            db.tasks.insert_task(
                conn, task_id=task_id, user_id=user_id, fields=fields, created_at=now_ts()
            )
            if data.category:
                db.categories.adjust_task_count(conn, fields["category"], 1)
            task = db.tasks.get_task(conn, task_id, user_id)

        logger.debug("Created task id=%s for user id=%s", task_id, user_id)
        return TaskResponse(**task)

    def update_task(self, user_id: str, task_id: str, data: TaskUpdate) -> TaskResponse:
        task_id = parse_id(task_id)
        changes = data.changes()

        with db.get_db(self._db_path, immediate=True) as conn:
            task = self._require_task(conn, task_id, user_id)

            if "status" in changes:
                check_transition(task["status"], changes["status"].value)

            if "category" in changes:
                old_category = task["category_id"]
                new_category = changes["category"] or None
                if new_category:
                    new_category = self._require_category(conn, new_category, user_id)
                changes["category"] = new_category
                if old_category != new_category:
                    if old_category:
                        db.categories.adjust_task_count(conn, old_category, -1)
                    if new_category:
                        db.categories.adjust_task_count(conn, new_category, 1)

            db.tasks.update_task(conn, task_id, user_id, changes, now_ts())
            task = db.tasks.get_task(conn, task_id, user_id)

        return TaskResponse(**task)

    def delete_task(self, user_id: str, task_id: str) -> None:
        task_id = parse_id(task_id)
        with db.get_db(self._db_path, immediate=True) as conn:
            task = self._require_task(conn, task_id, user_id)
            db.tasks.delete_task(conn, task_id, user_id)
            if task["category_id"]:
                db.categories.adjust_task_count(conn, task["category_id"], -1)
        logger.debug("Deleted task id=%s for user id=%s", task_id, user_id)

    def set_status(self, user_id: str, task_id: str, status: TaskStatus) -> TaskResponse:
        task_id = parse_id(task_id)
        with db.get_db(self._db_path, immediate=True) as conn:
            task = self._require_task(conn, task_id, user_id)
            check_transition(task["status"], status.value)
            db.tasks.update_task(conn, task_id, user_id, {"status": status}, now_ts())
            task = db.tasks.get_task(conn, task_id, user_id)
        return TaskResponse(**task)

    def set_priority(self, user_id: str, task_id: str, priority: TaskPriority) -> TaskResponse:
        task_id = parse_id(task_id)
        with db.get_db(self._db_path, immediate=True) as conn:
            if not db.tasks.update_task(conn, task_id, user_id, {"priority": priority}, now_ts()):
                raise TaskNotFoundError()
            task = db.tasks.get_task(conn, task_id, user_id)
        return TaskResponse(**task)

    def share_task(self, user_id: str, task_id: str, target_user_id: str) -> TaskResponse:
        """Grant another user read access to one of the caller's tasks."""
        task_id = parse_id(task_id)
        target_user_id = parse_id(target_user_id)

        with db.get_db(self._db_path, immediate=True) as conn:
            self._require_task(conn, task_id, user_id)
            if not db.users.get_user_by_id(conn, target_user_id):
                raise UserNotFoundError()
            if db.tasks.is_shared_with(conn, task_id, target_user_id):
                raise AlreadySharedError()
            try:
                db.tasks.add_share(conn, task_id, target_user_id, now_ts())
            except sqlite3.IntegrityError as exc:
                raise AlreadySharedError() from exc
            task = db.tasks.get_task(conn, task_id, user_id)

        logger.info("Task id=%s shared by user id=%s with user id=%s", task_id, user_id, target_user_id)
        return TaskResponse(**task)

    def list_shared_with_me(self, user_id: str) -> list[SharedTaskResponse]:
        with db.get_db(self._db_path) as conn:
            tasks = db.tasks.find_shared_with(conn, user_id)
        return [SharedTaskResponse(**task) for task in tasks]

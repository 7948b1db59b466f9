"""Task persistence. Every owner-facing lookup is scoped to the owning user."""

import json
import sqlite3
from enum import Enum

from ..filters import TaskQuery
from ..utils import format_datetime, parse_datetime

TASK_SELECT = """
    SELECT t.*,
           c.name AS category_name,
           c.color AS category_color,
           (SELECT json_group_array(s.user_id)
              FROM task_shares s WHERE s.task_id = t.id) AS shared_with_json
      FROM tasks t
      LEFT JOIN categories c ON c.id = t.category_id
"""

# API field name -> column, for partial updates.
UPDATABLE_COLUMNS = {
    "title": "title",
    "description": "description",
    "status": "status",
    "priority": "priority",
    "due_date": "due_date",
    "category": "category_id",
    "tags": "tags",
    "estimated_hours": "estimated_hours",
}

STATUS_BUCKETS = ("todo", "in-progress", "completed", "archived")


def _encode(field: str, value):
    if isinstance(value, Enum):
        return value.value
    if field == "tags":
        return json.dumps(list(value or []))
    if field == "due_date":
        return format_datetime(value)
    return value


def _to_dict(row: sqlite3.Row | None) -> dict | None:
    if row is None:
        return None
    task = dict(row)
    task["user"] = task.pop("user_id")
    task["tags"] = json.loads(task["tags"] or "[]")
    task["due_date"] = parse_datetime(task["due_date"])
    task["shared_with"] = json.loads(task.pop("shared_with_json") or "[]")
    name = task.pop("category_name")
    color = task.pop("category_color")
    if task["category_id"] and name is not None:
        task["category"] = {"id": task["category_id"], "name": name, "color": color}
    else:
        task["category"] = None
    if "owner_username" in task:
        task["owner"] = {
            "id": task["user"],
            "username": task.pop("owner_username"),
            "email": task.pop("owner_email"),
        }
    return task


def insert_task(
    conn: sqlite3.Connection,
    *,
    task_id: str,
    user_id: str,
    fields: dict,
    created_at: int,
) -> None:
    """Insert a task; `fields` uses API field names (see UPDATABLE_COLUMNS)."""
    columns = ["id", "user_id", "created_at", "updated_at"]
    params = [task_id, user_id, created_at, created_at]
    for field, value in fields.items():
        columns.append(UPDATABLE_COLUMNS[field])
        params.append(_encode(field, value))

    conn.execute(
        f"INSERT INTO tasks ({', '.join(columns)}) VALUES ({', '.join('?' for _ in columns)})",
        params,
    )


def get_task(conn: sqlite3.Connection, task_id: str, user_id: str) -> dict | None:
    """Get a task by ID, only if owned by `user_id`."""
    row = conn.execute(
        f"{TASK_SELECT} WHERE t.id = ? AND t.user_id = ?",
        (task_id, user_id),
    ).fetchone()
    return _to_dict(row)


def find_tasks(conn: sqlite3.Connection, query: TaskQuery) -> list[dict]:
    """Get one page of tasks matching a built query."""
    cursor = conn.execute(
        f"{TASK_SELECT} WHERE {query.where} ORDER BY {query.order_by} LIMIT ? OFFSET ?",
        (*query.params, query.limit, query.skip),
    )
    return [_to_dict(row) for row in cursor.fetchall()]


def count_tasks(conn: sqlite3.Connection, query: TaskQuery) -> int:
    """Count all tasks matching a built query, ignoring the page window."""
    row = conn.execute(
        f"SELECT COUNT(*) FROM tasks t WHERE {query.where}",
        query.params,
    ).fetchone()
    return row[0]


def count_by_status(conn: sqlite3.Connection, user_id: str) -> dict[str, int]:
    """Count every task of the user per status; missing buckets are zero."""
    counts = {status: 0 for status in STATUS_BUCKETS}
    cursor = conn.execute(
        "SELECT status, COUNT(*) AS n FROM tasks WHERE user_id = ? GROUP BY status",
        (user_id,),
    )
    for row in cursor.fetchall():
        counts[row["status"]] = row["n"]
    return counts


def update_task(
    conn: sqlite3.Connection, task_id: str, user_id: str, changes: dict, updated_at: int
) -> bool:
    """Apply allow-listed field changes to an owned task."""
    updates = []
    params: list = []
    for field, value in changes.items():
        updates.append(f"{UPDATABLE_COLUMNS[field]} = ?")
        params.append(_encode(field, value))

    updates.append("updated_at = ?")
    params.extend([updated_at, task_id, user_id])

    cursor = conn.execute(
        f"UPDATE tasks SET {', '.join(updates)} WHERE id = ? AND user_id = ?",
        params,
    )
    return cursor.rowcount > 0


def delete_task(conn: sqlite3.Connection, task_id: str, user_id: str) -> bool:
    """Delete an owned task; its share grants go with it."""
    cursor = conn.execute(
        "DELETE FROM tasks WHERE id = ? AND user_id = ?",
        (task_id, user_id),
    )
    return cursor.rowcount > 0


def clear_category(
    conn: sqlite3.Connection, category_id: str, user_id: str, updated_at: int
) -> int:
    """Detach all of the user's tasks from a category. Returns how many changed."""
    cursor = conn.execute(
        """
        UPDATE tasks SET category_id = NULL, updated_at = ?
        WHERE category_id = ? AND user_id = ?
        """,
        (updated_at, category_id, user_id),
    )
    return cursor.rowcount


def is_shared_with(conn: sqlite3.Connection, task_id: str, user_id: str) -> bool:
    row = conn.execute(
        "SELECT 1 FROM task_shares WHERE task_id = ? AND user_id = ?",
        (task_id, user_id),
    ).fetchone()
    return row is not None


def add_share(conn: sqlite3.Connection, task_id: str, user_id: str, created_at: int) -> None:
    """Grant read access. Raises sqlite3.IntegrityError if already granted."""
    conn.execute(
        "INSERT INTO task_shares (task_id, user_id, created_at) VALUES (?, ?, ?)",
        (task_id, user_id, created_at),
    )


def find_shared_with(conn: sqlite3.Connection, user_id: str) -> list[dict]:
    """Get all tasks shared with `user_id`, whoever owns them."""
    cursor = conn.execute(
        f"""
        SELECT q.*, u.username AS owner_username, u.email AS owner_email
          FROM ({TASK_SELECT}) q
          JOIN users u ON u.id = q.user_id
         WHERE q.id IN (SELECT task_id FROM task_shares WHERE user_id = ?)
         ORDER BY q.created_at DESC, q.id
        """,
        (user_id,),
    )
    return [_to_dict(row) for row in cursor.fetchall()]

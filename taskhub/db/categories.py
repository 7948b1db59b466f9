"""Category persistence. Every lookup is scoped to the owning user."""

import sqlite3

# API field name -> column, for partial updates.
UPDATABLE_COLUMNS = {"name": "name", "color": "color"}


def _to_dict(row: sqlite3.Row | None) -> dict | None:
    if row is None:
        return None
    category = dict(row)
    category["user"] = category.pop("user_id")
    return category


def insert_category(
    conn: sqlite3.Connection,
    *,
    category_id: str,
    user_id: str,
    name: str,
    color: str,
    created_at: int,
) -> None:
    """Insert a category. Raises sqlite3.IntegrityError on a duplicate name."""
    conn.execute(
        """
        INSERT INTO categories (id, user_id, name, color, task_count, created_at, updated_at)
        VALUES (?, ?, ?, ?, 0, ?, ?)
        """,
        (category_id, user_id, name, color, created_at, created_at),
    )


def get_category(conn: sqlite3.Connection, category_id: str, user_id: str) -> dict | None:
    row = conn.execute(
        "SELECT * FROM categories WHERE id = ? AND user_id = ?",
        (category_id, user_id),
    ).fetchone()
    return _to_dict(row)


def get_category_by_name(conn: sqlite3.Connection, user_id: str, name: str) -> dict | None:
    row = conn.execute(
        "SELECT * FROM categories WHERE user_id = ? AND name = ?",
        (user_id, name),
    ).fetchone()
    return _to_dict(row)


def list_categories(conn: sqlite3.Connection, user_id: str) -> list[dict]:
    cursor = conn.execute(
        "SELECT * FROM categories WHERE user_id = ? ORDER BY created_at, rowid",
        (user_id,),
    )
    return [_to_dict(row) for row in cursor.fetchall()]


def update_category(
    conn: sqlite3.Connection, category_id: str, user_id: str, changes: dict, updated_at: int
) -> bool:
    """Apply allow-listed field changes."""
    updates = []
    params: list = []
    for field, value in changes.items():
        updates.append(f"{UPDATABLE_COLUMNS[field]} = ?")
        params.append(value)

    updates.append("updated_at = ?")
    params.extend([updated_at, category_id, user_id])

    cursor = conn.execute(
        f"UPDATE categories SET {', '.join(updates)} WHERE id = ? AND user_id = ?",
        params,
    )
    return cursor.rowcount > 0


def adjust_task_count(conn: sqlite3.Connection, category_id: str, delta: int) -> None:
    """Atomically add `delta` to the denormalized task counter."""
    conn.execute(
        "UPDATE categories SET task_count = task_count + ? WHERE id = ?",
        (delta, category_id),
    )


def delete_category(conn: sqlite3.Connection, category_id: str, user_id: str) -> bool:
    cursor = conn.execute(
        "DELETE FROM categories WHERE id = ? AND user_id = ?",
        (category_id, user_id),
    )
    return cursor.rowcount > 0

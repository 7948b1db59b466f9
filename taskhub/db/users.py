"""User persistence."""

import sqlite3


def create_user(
    conn: sqlite3.Connection,
    *,
    user_id: str,
    username: str,
    email: str,
    password_hash: str,
    role: str,
    created_at: int,
) -> None:
    """Insert a user. Raises sqlite3.IntegrityError on a duplicate username/email."""
    conn.execute(
        """
        INSERT INTO users (id, username, email, password_hash, role, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?, ?)
        """,
        (user_id, username, email, password_hash, role, created_at, created_at),
    )


def get_user_by_id(conn: sqlite3.Connection, user_id: str) -> dict | None:
    """Get a user by id, credentials included."""
    row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
    return dict(row) if row else None


def get_user_by_email(conn: sqlite3.Connection, email: str) -> dict | None:
    """Get a user by exact email."""
    row = conn.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()
    return dict(row) if row else None


def find_user_by_email_or_username(
    conn: sqlite3.Connection, email: str, username: str
) -> dict | None:
    """Get any user holding either the email or the username."""
    row = conn.execute(
        "SELECT * FROM users WHERE email = ? OR username = ? LIMIT 1",
        (email, username),
    ).fetchone()
    return dict(row) if row else None


def set_refresh_token(
    conn: sqlite3.Connection, user_id: str, token: str | None, updated_at: int
) -> None:
    """Store (or clear, with None) the user's single live refresh token."""
    conn.execute(
        "UPDATE users SET refresh_token = ?, updated_at = ? WHERE id = ?",
        (token, updated_at, user_id),
    )


def rotate_refresh_token(
    conn: sqlite3.Connection, user_id: str, current: str, new: str, updated_at: int
) -> bool:
    """Replace the stored refresh token only if it still equals `current`."""
    cursor = conn.execute(
        """
        UPDATE users SET refresh_token = ?, updated_at = ?
        WHERE id = ? AND refresh_token = ?
        """,
        (new, updated_at, user_id, current),
    )
    return cursor.rowcount > 0

"""Small helpers for ids and timestamps."""

import time
from datetime import datetime, timezone

from ulid import ULID

from .errors import InvalidIdError


def new_id() -> str:
    """Generate a new sortable entity id."""
    return str(ULID())


def parse_id(value: str) -> str:
    """Return the canonical form of an entity id, or raise InvalidIdError."""
    try:
        return str(ULID.from_str(value))
    except (ValueError, TypeError) as exc:
        raise InvalidIdError() from exc


def now_ts() -> int:
    return int(time.time())


def to_utc(value: datetime) -> datetime:
    """Naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_datetime(value: datetime | None) -> str | None:
    # Fixed width so that text comparison in SQL is chronological.
    if value is None:
        return None
    return to_utc(value).isoformat(timespec="milliseconds")


def parse_datetime(value: str | None) -> datetime | None:
    if value is None:
        return None
    return datetime.fromisoformat(value)

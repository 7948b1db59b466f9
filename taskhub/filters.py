"""Translate task list parameters into an owner-scoped SQL query."""

from dataclasses import dataclass
from datetime import datetime

from .errors import ValidationError
from .utils import format_datetime

DEFAULT_SORT = "dueDate:asc"
DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

TASK_STATUSES = ("todo", "in-progress", "completed", "archived")

SORT_COLUMNS = {
    "dueDate": "t.due_date",
    "createdAt": "t.created_at",
    "updatedAt": "t.updated_at",
    "title": "t.title",
    "priority": "t.priority",
    "status": "t.status",
    "estimatedHours": "t.estimated_hours",
    "category": "t.category_id",
}


@dataclass(frozen=True)
class TaskFilters:
    """Raw list parameters as received from the client."""

    status: str | None = None
    priority: str | None = None
    category: str | None = None
    due_from: datetime | None = None
    due_to: datetime | None = None
    search: str | None = None
    sort_by: str = DEFAULT_SORT
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT


@dataclass(frozen=True)
class TaskQuery:
    """WHERE clause (over alias `t`), its params, ORDER BY clause and window."""

    where: str
    params: tuple
    order_by: str
    page: int
    limit: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def _invalid(field: str, message: str) -> ValidationError:
    return ValidationError(details=[{"field": field, "message": message}])


def _like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def parse_statuses(raw: str) -> list[str]:
    """Split a comma-separated status list, rejecting unknown values."""
    statuses = [s.strip() for s in raw.split(",") if s.strip()]
    unknown = [s for s in statuses if s not in TASK_STATUSES]
    if unknown:
        raise _invalid("status", f"Invalid status: {', '.join(unknown)}")
    return statuses


def parse_sort(sort_by: str | None) -> str:
    """Turn `field:direction` into an ORDER BY clause."""
    field, _, direction = (sort_by or DEFAULT_SORT).partition(":")
    field = field.strip() or DEFAULT_SORT.split(":")[0]
    column = SORT_COLUMNS.get(field)
    if column is None:
        raise _invalid("sortBy", f"Cannot sort by {field}")
    order = "DESC" if direction.strip().lower() == "desc" else "ASC"
    return f"{column} {order}, t.id ASC"


def build_task_query(owner_id: str, filters: TaskFilters) -> TaskQuery:
    """Build the query for one page of the owner's tasks."""
    if filters.page < 1:
        raise _invalid("page", "Page must be a positive integer")
    if filters.limit < 1:
        raise _invalid("limit", "Limit must be a positive integer")

    clauses = ["t.user_id = ?"]
    params: list = [owner_id]

    if filters.status:
        statuses = parse_statuses(filters.status)
        if statuses:
            clauses.append(f"t.status IN ({', '.join('?' for _ in statuses)})")
            params.extend(statuses)

    if filters.priority:
        clauses.append("t.priority = ?")
        params.append(filters.priority)

    if filters.category:
        clauses.append("t.category_id = ?")
        params.append(filters.category)

    if filters.due_from is not None:
        clauses.append("t.due_date >= ?")
        params.append(format_datetime(filters.due_from))

    if filters.due_to is not None:
        clauses.append("t.due_date <= ?")
        params.append(format_datetime(filters.due_to))

    if filters.search:
        pattern = _like_pattern(filters.search)
        clauses.append(
            "(t.title LIKE ? ESCAPE '\\'"
            " OR t.description LIKE ? ESCAPE '\\'"
            " OR EXISTS (SELECT 1 FROM json_each(t.tags) AS tag"
            " WHERE tag.value LIKE ? ESCAPE '\\'))"
        )
        params.extend([pattern, pattern, pattern])

    return TaskQuery(
        where=" AND ".join(clauses),
        params=tuple(params),
        order_by=parse_sort(filters.sort_by),
        page=filters.page,
        limit=filters.limit,
    )

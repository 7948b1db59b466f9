"""Pydantic models for category API."""

from pydantic import Field

from .common import CamelModel, RequestModel

DEFAULT_COLOR = "#3B82F6"
COLOR_PATTERN = r"^#([A-Fa-f0-9]{6})$"


class CategoryCreate(RequestModel):
    """Request model for creating a category."""

    name: str = Field(..., min_length=1, max_length=50)
    color: str = Field(DEFAULT_COLOR, pattern=COLOR_PATTERN)


class CategoryUpdate(RequestModel):
    """Request model for renaming or recoloring a category."""

    name: str | None = Field(None, min_length=1, max_length=50)
    color: str | None = Field(None, pattern=COLOR_PATTERN)


class CategorySummary(CamelModel):
    """Category fields embedded in a task."""

    id: str
    name: str
    color: str


class CategoryResponse(CamelModel):
    """Response model for a category."""

    id: str
    name: str
    color: str
    user: str
    task_count: int
    created_at: int
    updated_at: int


class CategoryData(CamelModel):
    category: CategoryResponse


class CategoryListData(CamelModel):
    categories: list[CategoryResponse]

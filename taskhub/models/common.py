"""Shared pydantic building blocks."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Base model exposing camelCase JSON while keeping snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RequestModel(CamelModel):
    """Base model for request bodies."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class ApiResponse(BaseModel, Generic[DataT]):
    """Success envelope shared by every endpoint."""

    success: bool = True
    message: str | None = None
    data: DataT | None = None


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    pages: int

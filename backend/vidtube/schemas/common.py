"""Shared schema base and response envelopes."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base schema: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class ApiResponse(CamelModel, Generic[T]):
    """Success envelope returned by every endpoint."""

    status_code: int = 200
    data: T | None = None
    message: str = "Success"
    success: bool = True


class PageResponse(CamelModel, Generic[T]):
    """Pagination envelope for list endpoints."""

    items: list[T]
    total: int
    page: int
    page_size: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool
    next_page: int | None = None
    prev_page: int | None = None


class Empty(CamelModel):
    """Empty payload for delete-style operations."""


def respond(data: Any = None, message: str = "Success", status_code: int = 200) -> dict:
    """Build a success envelope; response_model validates and serializes it."""
    return {
        "status_code": status_code,
        "data": data,
        "message": message,
        "success": status_code < 400,
    }

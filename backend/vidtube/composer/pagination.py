"""Offset pagination and whitelisted sorting."""

import math
from dataclasses import dataclass, field
from typing import Mapping

from vidtube.exceptions import InvalidArgumentError

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PageRequest:
    """Validated page number (1-based) and page size."""

    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @classmethod
    def from_query(
        cls,
        page: int | str | None = None,
        limit: int | str | None = None,
        max_limit: int = MAX_PAGE_SIZE,
        default_limit: int = DEFAULT_PAGE_SIZE,
    ) -> "PageRequest":
        """
        Normalize raw query parameters.

        Page defaults to 1 and is clamped to at least 1. Limit defaults to
        default_limit, must be a positive integer, and is capped at max_limit.

        Raises:
            InvalidArgumentError: Non-integer page/limit or non-positive limit
        """
        page_number = _to_int(page, "page", default=1)
        page_size = _to_int(limit, "limit", default=default_limit)

        if page_size < 1:
            raise InvalidArgumentError("Limit must be a positive integer.")

        return cls(page=max(page_number, 1), limit=min(page_size, max_limit))


def _to_int(value: int | str | None, name: str, default: int) -> int:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{name.capitalize()} must be an integer.")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"{name.capitalize()} must be an integer.")


@dataclass
class Page:
    """One page of results plus pagination metadata."""

    items: list = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.total else 0

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev_page(self) -> bool:
        return self.page > 1

    @property
    def next_page(self) -> int | None:
        return self.page + 1 if self.has_next_page else None

    @property
    def prev_page(self) -> int | None:
        """Previous existing page; past the end this is the last page."""
        if not self.has_prev_page:
            return None
        return min(self.page - 1, max(self.total_pages, 1))

    def to_dict(self) -> dict:
        return {
            "items": self.items,
            "total": self.total,
            "page": self.page,
            "page_size": self.limit,
            "total_pages": self.total_pages,
            "has_next_page": self.has_next_page,
            "has_prev_page": self.has_prev_page,
            "next_page": self.next_page,
            "prev_page": self.prev_page,
        }


def _snake_case(name: str) -> str:
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in name).lstrip("_")


@dataclass(frozen=True)
class SortSpec:
    """Validated sort column and direction."""

    column: str = "created_at"
    descending: bool = True

    @classmethod
    def parse(
        cls,
        sort_by: str | None,
        sort_type: str | None,
        allowed: Mapping[str, str],
        default: "SortSpec | None" = None,
    ) -> "SortSpec":
        """
        Build a SortSpec from request parameters.

        Args:
            sort_by: Public field name (camelCase or snake_case)
            sort_type: "asc" or "desc" (defaults to "desc")
            allowed: Public snake_case field name -> model column
            default: Sort used when sort_by is not supplied

        Raises:
            InvalidArgumentError: Field not sortable or unknown direction
        """
        default = default or cls()
        if not sort_by:
            if sort_type:
                return cls(column=default.column, descending=_descending(sort_type))
            return default

        key = _snake_case(sort_by.strip())
        if key not in allowed:
            options = ", ".join(sorted(allowed))
            raise InvalidArgumentError(f"Cannot sort by '{sort_by}'. Allowed: {options}.")

        return cls(column=allowed[key], descending=_descending(sort_type or "desc"))


def _descending(sort_type: str) -> bool:
    direction = sort_type.strip().lower()
    if direction not in ("asc", "desc"):
        raise InvalidArgumentError("Sort type must be 'asc' or 'desc'.")
    return direction == "desc"

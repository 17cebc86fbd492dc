"""Tests for PageRequest, Page and SortSpec."""

import pytest

from vidtube.composer import Page, PageRequest, SortSpec
from vidtube.exceptions import InvalidArgumentError


class TestPageRequest:
    def test_defaults(self) -> None:
        request = PageRequest.from_query()
        assert request.page == 1
        assert request.limit == 10
        assert request.offset == 0

    def test_string_values_are_parsed(self) -> None:
        request = PageRequest.from_query("3", "20")
        assert (request.page, request.limit, request.offset) == (3, 20, 40)

    def test_page_is_clamped_to_one(self) -> None:
        assert PageRequest.from_query(0, 5).page == 1
        assert PageRequest.from_query(-4, 5).page == 1

    def test_limit_is_capped(self) -> None:
        assert PageRequest.from_query(1, 1000, max_limit=100).limit == 100

    def test_non_positive_limit_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError, match="positive"):
            PageRequest.from_query(1, 0)
        with pytest.raises(InvalidArgumentError, match="positive"):
            PageRequest.from_query(1, -5)

    def test_non_integer_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError, match="Limit must be an integer"):
            PageRequest.from_query(1, "ten")
        with pytest.raises(InvalidArgumentError, match="Page must be an integer"):
            PageRequest.from_query("first", 10)


class TestPage:
    def test_metadata_for_middle_page(self) -> None:
        page = Page(items=[1, 2], total=25, page=2, limit=10)
        assert page.total_pages == 3
        assert page.has_next_page is True
        assert page.has_prev_page is True
        assert page.next_page == 3
        assert page.prev_page == 1

    def test_last_page(self) -> None:
        page = Page(items=[1], total=21, page=3, limit=10)
        assert page.has_next_page is False
        assert page.next_page is None

    def test_beyond_last_page(self) -> None:
        page = Page(items=[], total=5, page=9, limit=10)
        assert page.total_pages == 1
        assert page.has_next_page is False
        assert page.has_prev_page is True
        assert page.prev_page == 1

    def test_beyond_last_page_of_empty_result(self) -> None:
        page = Page(items=[], total=0, page=4, limit=10)
        assert page.prev_page == 1

    def test_empty_result(self) -> None:
        page = Page(items=[], total=0, page=1, limit=10)
        assert page.total_pages == 0
        assert page.has_next_page is False
        assert page.has_prev_page is False

    def test_to_dict_keys(self) -> None:
        data = Page(items=["a"], total=1, page=1, limit=5).to_dict()
        assert data == {
            "items": ["a"],
            "total": 1,
            "page": 1,
            "page_size": 5,
            "total_pages": 1,
            "has_next_page": False,
            "has_prev_page": False,
            "next_page": None,
            "prev_page": None,
        }


class TestSortSpec:
    ALLOWED = {"created_at": "created_at", "views": "views"}

    def test_default_is_newest_first(self) -> None:
        spec = SortSpec.parse(None, None, self.ALLOWED)
        assert spec == SortSpec(column="created_at", descending=True)

    def test_camel_case_field_accepted(self) -> None:
        spec = SortSpec.parse("createdAt", "asc", self.ALLOWED)
        assert spec == SortSpec(column="created_at", descending=False)

    def test_direction_only(self) -> None:
        spec = SortSpec.parse(None, "asc", self.ALLOWED)
        assert spec.column == "created_at"
        assert spec.descending is False

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError, match="Cannot sort by"):
            SortSpec.parse("password_hash", "asc", self.ALLOWED)

    def test_unknown_direction_rejected(self) -> None:
        with pytest.raises(InvalidArgumentError, match="asc"):
            SortSpec.parse("views", "sideways", self.ALLOWED)

"""
Unit Tests for Pagination Utilities.

PagedResult arithmetic and the links/meta built from a request URL.
"""

from starlette.datastructures import URL, QueryParams

from notekeeper.core.pagination import (
    PagedResult,
    build_page_links,
    build_page_meta,
    create_paginated_response,
)
from notekeeper.schemas.base import PageMeta

BASE_URL = URL("http://test/api/v1/notes?archived=1&search=milk")


def params(link: str) -> dict[str, str]:
    return dict(QueryParams(URL(link).query))


class TestPagedResult:
    """Tests for PagedResult properties."""

    def test_empty_result(self):
        result = PagedResult(items=[], total=0, page=1, per_page=5)

        assert result.last_page == 1
        assert result.has_more is False
        assert result.first_index is None
        assert result.last_index is None

    def test_middle_page(self):
        result = PagedResult(items=list(range(5)), total=12, page=2, per_page=5)

        assert result.last_page == 3
        assert result.has_more is True
        assert result.first_index == 6
        assert result.last_index == 10

    def test_partial_last_page(self):
        result = PagedResult(items=[1, 2], total=12, page=3, per_page=5)

        assert result.has_more is False
        assert result.first_index == 11
        assert result.last_index == 12

    def test_exact_multiple(self):
        assert PagedResult(items=[], total=10, page=1, per_page=5).last_page == 2


class TestBuildPageLinks:
    """Tests for build_page_links."""

    def test_first_page_links(self):
        links = build_page_links(BASE_URL, PagedResult(items=[1] * 5, total=12, page=1, per_page=5))

        assert params(links.first) == {"archived": "1", "search": "milk", "page": "1"}
        assert params(links.last)["page"] == "3"
        assert params(links.next)["page"] == "2"
        assert links.prev is None

    def test_links_keep_query_parameters(self):
        links = build_page_links(BASE_URL, PagedResult(items=[1] * 5, total=12, page=2, per_page=5))

        for link in (links.first, links.last, links.prev, links.next):
            assert params(link)["archived"] == "1"
            assert params(link)["search"] == "milk"

    def test_existing_page_parameter_replaced(self):
        url = URL("http://test/api/v1/notes?page=2")
        links = build_page_links(url, PagedResult(items=[1] * 5, total=12, page=2, per_page=5))

        assert params(links.prev) == {"page": "1"}
        assert params(links.next) == {"page": "3"}

    def test_page_past_the_end(self):
        links = build_page_links(BASE_URL, PagedResult(items=[], total=12, page=7, per_page=5))

        assert links.next is None
        assert params(links.prev)["page"] == "3"


class TestBuildPageMeta:
    """Tests for build_page_meta."""

    def test_meta_fields(self):
        meta = build_page_meta(BASE_URL, PagedResult(items=[1, 2], total=12, page=3, per_page=5))

        assert meta == PageMeta(
            current_page=3,
            last_page=3,
            per_page=5,
            total=12,
            from_=11,
            to=12,
            path="http://test/api/v1/notes",
        )


class TestCreatePaginatedResponse:
    """Tests for create_paginated_response serialization."""

    def test_from_is_serialized_without_underscore(self):
        from pydantic import BaseModel

        class Item(BaseModel):
            value: int

        response = create_paginated_response(
            url=BASE_URL,
            result=PagedResult(items=[{"value": 1}], total=1, page=1, per_page=5),
            item_schema=Item,
            request_id="req-1",
        )

        assert response["success"] is True
        assert response["data"] == [{"value": 1}]
        assert response["meta"]["from"] == 1
        assert "from_" not in response["meta"]
        assert response["metadata"]["request_id"] == "req-1"

"""
Pagination Utilities.

Page-numbered pagination for list endpoints. Repositories return a
PagedResult; endpoints turn it into a PaginatedResponse whose links
keep every query parameter of the original request and only swap
the ``page`` value, so a client can walk the pages deterministically.
"""

import math
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from fastapi import Query
from pydantic import BaseModel
from starlette.datastructures import URL

from notekeeper.schemas.base import PageLinks, PageMeta, PaginatedResponse, ResponseMetadata

T = TypeVar("T")


# =============================================================================
# Pagination Parameters
# =============================================================================


def get_page_param(
    page: int = Query(
        default=1,
        ge=1,
        description="Page number, starting at 1",
    ),
) -> int:
    """
    FastAPI dependency for the page number.

    Usage:
        @router.get("/items")
        async def list_items(page: int = Depends(get_page_param)):
            ...
    """
    return page


# =============================================================================
# Paged Result
# =============================================================================


@dataclass
class PagedResult(Generic[T]):
    """Items of one page plus the totals needed to describe it."""

    items: list[T]
    total: int
    page: int
    per_page: int

    @property
    def last_page(self) -> int:
        """Number of the last page; 1 when there are no items."""
        return max(1, math.ceil(self.total / self.per_page))

    @property
    def has_more(self) -> bool:
        """Whether a page follows this one."""
        return self.page < self.last_page

    @property
    def first_index(self) -> int | None:
        """1-based position of the first item on this page."""
        if not self.items:
            return None
        return (self.page - 1) * self.per_page + 1

    @property
    def last_index(self) -> int | None:
        """1-based position of the last item on this page."""
        if not self.items:
            return None
        return (self.page - 1) * self.per_page + len(self.items)


# =============================================================================
# Response Builder
# =============================================================================


def build_page_links(url: URL, result: PagedResult[Any]) -> PageLinks:
    """
    Build first/last/prev/next links from the request URL.

    Args:
        url: The URL of the current request, query string included
        result: The page being returned
    """

    def page_url(number: int) -> str:
        return str(url.include_query_params(page=number))

    prev_page = result.page - 1 if result.page > 1 else None
    if prev_page is not None:
        prev_page = min(prev_page, result.last_page)

    return PageLinks(
        first=page_url(1),
        last=page_url(result.last_page),
        prev=page_url(prev_page) if prev_page is not None else None,
        next=page_url(result.page + 1) if result.has_more else None,
    )


def build_page_meta(url: URL, result: PagedResult[Any]) -> PageMeta:
    """Build page position metadata for a result."""
    return PageMeta(
        current_page=result.page,
        last_page=result.last_page,
        per_page=result.per_page,
        total=result.total,
        from_=result.first_index,
        to=result.last_index,
        path=str(url.replace(query="")),
    )


def create_paginated_response(
    url: URL,
    result: PagedResult[Any],
    item_schema: type[BaseModel],
    request_id: str | None = None,
) -> dict[str, Any]:
    """
    Create a standardized paginated response.

    Usage:
        return create_paginated_response(
            url=request.url,
            result=page,
            item_schema=NoteResponse,
            request_id=request_id,
        )
    """
    validated_items = [
        item_schema.model_validate(item).model_dump(mode="json")
        for item in result.items
    ]

    response = PaginatedResponse(
        data=validated_items,
        links=build_page_links(url, result),
        meta=build_page_meta(url, result),
        metadata=ResponseMetadata(request_id=request_id),
    )

    return response.model_dump(mode="json", by_alias=True)

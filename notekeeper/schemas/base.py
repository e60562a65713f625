"""
Base Schemas.

Response envelopes shared by every endpoint.
"""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from notekeeper.core.utils import utc_now

DataT = TypeVar("DataT")


class ResponseMetadata(BaseModel):
    """Metadata included in all API responses."""

    timestamp: datetime = Field(default_factory=utc_now)
    request_id: str | None = None


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str
    message: str
    details: dict[str, Any] | None = None


class ApiResponse(BaseModel, Generic[DataT]):
    """Standard API response envelope."""

    success: bool = True
    data: DataT | None = None
    error: ErrorDetail | None = None
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)

    model_config = ConfigDict(from_attributes=True)


class ErrorResponse(BaseModel):
    """Standard error response."""

    success: bool = False
    data: None = None
    error: ErrorDetail
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)


class PageLinks(BaseModel):
    """Navigation links for a page; null where no such page exists."""

    first: str
    last: str
    prev: str | None = None
    next: str | None = None


class PageMeta(BaseModel):
    """Page position and totals."""

    current_page: int
    last_page: int
    per_page: int
    total: int
    from_: int | None = Field(default=None, serialization_alias="from")
    to: int | None = None
    path: str


class PaginatedResponse(BaseModel, Generic[DataT]):
    """Page-numbered list response."""

    success: bool = True
    data: list[DataT]
    error: None = None
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)
    links: PageLinks
    meta: PageMeta

# Pydantic schemas package
from notekeeper.schemas.base import (
    ApiResponse,
    ErrorDetail,
    ErrorResponse,
    PageLinks,
    PageMeta,
    PaginatedResponse,
    ResponseMetadata,
)

__all__ = [
    "ApiResponse",
    "ErrorDetail",
    "ErrorResponse",
    "PageLinks",
    "PageMeta",
    "PaginatedResponse",
    "ResponseMetadata",
]

"""
Note Schemas.

Pydantic schemas for note request/response validation, and the
query object the listing engine consumes.
"""

import enum
from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from notekeeper.core.exceptions import ValidationError
from notekeeper.models.note import TITLE_MAX_LENGTH

NOTES_PAGE_SIZE = 5


class NoteCreate(BaseModel):
    """Schema for creating a new note."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=TITLE_MAX_LENGTH,
        description="Note title",
        examples=["My first note"],
    )
    body: str | None = Field(
        default=None,
        description="Note body",
        examples=["Some content"],
    )


class NoteUpdate(BaseModel):
    """
    Schema for updating an existing note.

    Only ``title`` and ``body`` can be changed; any other field in the
    request body is ignored. Fields left out are not touched.
    """

    title: str | None = Field(
        default=None,
        min_length=1,
        max_length=TITLE_MAX_LENGTH,
        description="Note title",
    )
    body: str | None = Field(
        default=None,
        description="Note body",
    )


class NoteResponse(BaseModel):
    """Schema for a note in API responses."""

    id: str = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    body: str | None = Field(description="Note body")
    archived: bool = Field(description="Whether the note is archived")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class ArchivedFilter(str, enum.Enum):
    """Which archive state a listing includes."""

    ACTIVE = "active"
    ARCHIVED = "archived"
    ALL = "all"

    @classmethod
    def from_param(cls, value: str | None) -> "ArchivedFilter":
        """
        Parse the ``archived`` query parameter.

        Absent means active only; listings never default to both states.
        """
        if value is None:
            return cls.ACTIVE
        normalized = value.strip().lower()
        if normalized in {"", "0", "false", "no", "off"}:
            return cls.ACTIVE
        if normalized in {"1", "true", "yes", "on"}:
            return cls.ARCHIVED
        if normalized in {"all", "any", "both"}:
            return cls.ALL
        raise ValidationError.for_field(
            "archived",
            "The archived field must be 0, 1 or all.",
            "enum",
        )


@dataclass(frozen=True)
class NoteQuery:
    """
    Filters for one page of an owner's notes.

    All filters combine with AND. ``owner_id`` is always applied.
    """

    owner_id: str
    archived: ArchivedFilter = ArchivedFilter.ACTIVE
    search: str | None = None
    page: int = 1
    per_page: int = NOTES_PAGE_SIZE

    def __post_init__(self) -> None:
        if not self.owner_id:
            raise ValueError("NoteQuery requires an owner_id")
        if self.search is not None:
            term = self.search.strip()
            object.__setattr__(self, "search", term or None)
        if self.page < 1:
            raise ValidationError.for_field("page", "The page must be at least 1.", "greater_than_equal")
        if self.per_page < 1:
            raise ValueError("per_page must be positive")

    @property
    def offset(self) -> int:
        """Number of rows before this page."""
        return (self.page - 1) * self.per_page

"""
Note Model.

A personal text note owned by exactly one actor. The owner is set once
at construction; the title is validated on every assignment; archiving
is one-way.
"""

from typing import Any

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, validates

from notekeeper.core.exceptions import ValidationError
from notekeeper.models.base import Base, TimestampMixin, UUIDMixin

MAX_NOTES_PER_USER = 100
TITLE_MAX_LENGTH = 255

# Fields a client may change after creation.
MUTABLE_FIELDS = frozenset({"title", "body"})


def validate_title(value: Any) -> str:
    """
    Check a note title.

    Raises:
        ValidationError: If the title is missing, blank or longer
            than TITLE_MAX_LENGTH characters
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError.for_field("title", "The title field is required.", "missing")
    if not isinstance(value, str):
        raise ValidationError.for_field("title", "The title field must be a string.", "string_type")
    if len(value) > TITLE_MAX_LENGTH:
        raise ValidationError.for_field(
            "title",
            f"The title field must not be greater than {TITLE_MAX_LENGTH} characters.",
            "string_too_long",
        )
    return value


class Note(UUIDMixin, TimestampMixin, Base):
    """
    Note database model.

    Construction requires ``owner_id`` and ``title``; ``body`` is
    optional and ``archived`` starts out False.
    """

    __tablename__ = "notes"

    owner_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH),
        nullable=False,
    )
    body: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    archived: Mapped[bool] = mapped_column(
        default=False,
        nullable=False,
    )

    def __init__(self, **kwargs: Any) -> None:
        if not kwargs.get("owner_id"):
            raise ValueError("A note requires an owner_id")
        if "title" not in kwargs:
            raise ValidationError.for_field("title", "The title field is required.", "missing")
        kwargs.setdefault("archived", False)
        super().__init__(**kwargs)

    @validates("title")
    def _validate_title(self, key: str, value: Any) -> str:
        return validate_title(value)

    @validates("owner_id")
    def _validate_owner_id(self, key: str, value: str) -> str:
        if self.owner_id is not None and value != self.owner_id:
            raise ValueError("owner_id cannot be reassigned")
        return value

    def archive(self) -> bool:
        """
        Archive the note.

        Returns:
            True if the note changed, False if it was already archived
        """
        if self.archived:
            return False
        self.archived = True
        return True

    def apply_changes(self, changes: dict[str, Any]) -> None:
        """
        Assign the provided mutable fields.

        Raises:
            ValueError: If ``changes`` names a field that is not mutable
            ValidationError: If a new title is invalid
        """
        unknown = set(changes) - MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields are not mutable: {sorted(unknown)}")
        if "title" in changes:
            validate_title(changes["title"])
        for key, value in changes.items():
            setattr(self, key, value)

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, owner_id={self.owner_id}, title={self.title!r})>"

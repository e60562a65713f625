"""
Note Repository.

Data access for notes, including the listing engine that turns a
NoteQuery into one ordered page of an owner's notes.
"""

from sqlalchemy import ColumnElement, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.core.pagination import PagedResult
from notekeeper.models.note import Note
from notekeeper.repositories.base import BaseRepository
from notekeeper.schemas.note import ArchivedFilter, NoteQuery

LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def note_filters(query: NoteQuery) -> list[ColumnElement[bool]]:
    """
    Translate a NoteQuery into WHERE clauses, combined with AND.

    The owner clause always comes first and is never omitted.
    """
    clauses: list[ColumnElement[bool]] = [Note.owner_id == query.owner_id]

    if query.archived is ArchivedFilter.ACTIVE:
        clauses.append(Note.archived.is_(False))
    elif query.archived is ArchivedFilter.ARCHIVED:
        clauses.append(Note.archived.is_(True))

    if query.search:
        pattern = f"%{escape_like(query.search)}%"
        clauses.append(
            or_(
                Note.title.ilike(pattern, escape=LIKE_ESCAPE),
                Note.body.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )

    return clauses


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Inherits standard persistence operations from BaseRepository
    and adds owner-scoped queries.
    """

    model = Note

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def count_by_owner(self, owner_id: str) -> int:
        """Count every note an owner has, archived ones included."""
        result = await self.session.execute(
            select(func.count())
            .select_from(Note)
            .where(Note.owner_id == owner_id)
        )
        return result.scalar_one()

    async def query_page(self, query: NoteQuery) -> PagedResult[Note]:
        """
        Fetch one page of notes matching a query.

        Ordered newest first, ties broken by descending id.

        Args:
            query: Owner, archive-state and search filters plus page

        Returns:
            The page's notes with the total matching count
        """
        clauses = note_filters(query)

        total_result = await self.session.execute(
            select(func.count()).select_from(Note).where(*clauses)
        )
        total = total_result.scalar_one()

        items: list[Note] = []
        if query.offset < total:
            result = await self.session.execute(
                select(Note)
                .where(*clauses)
                .order_by(Note.created_at.desc(), Note.id.desc())
                .limit(query.per_page)
                .offset(query.offset)
            )
            items = list(result.scalars().all())

        return PagedResult(
            items=items,
            total=total,
            page=query.page,
            per_page=query.per_page,
        )

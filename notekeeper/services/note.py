"""
Note Service.

Business logic for notes. Every operation takes the acting identity
explicitly, consults NotePolicy before any write, and leaves the
transaction boundary to the caller's session.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.core.pagination import PagedResult
from notekeeper.core.security import Actor
from notekeeper.models.note import Note
from notekeeper.policies.note import NoteAbility, NotePolicy
from notekeeper.repositories.note import NoteRepository
from notekeeper.schemas.note import ArchivedFilter, NoteCreate, NoteQuery, NoteUpdate
from notekeeper.services.base import BaseService


class NoteService(BaseService):
    """
    Service for note business logic.

    Handles creation under quota, owner-only updates and archiving,
    and owner-scoped listing.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)
        self.policy = NotePolicy(self.repo)

    async def create_note(self, actor: Actor, data: NoteCreate) -> Note:
        """
        Create a note owned by the actor.

        Raises:
            ForbiddenError: If the actor has reached the note quota
            ValidationError: If the title is invalid
        """
        await self.policy.authorize(NoteAbility.CREATE, actor)

        note = Note(owner_id=actor.id, title=data.title, body=data.body)

        self._log_operation("Creating note", actor_id=actor.id)
        note = await self._execute_db_operation("create_note", self.repo.save(note))

        self._log_debug("Note created", note_id=note.id, actor_id=actor.id)
        return note

    async def update_note(self, actor: Actor, note_id: str, data: NoteUpdate) -> Note:
        """
        Update the provided fields of an actor's note.

        Args:
            actor: The acting identity
            note_id: Note ID to update
            data: Only fields explicitly set are applied

        Raises:
            NotFoundError: If note not found
            ForbiddenError: If the actor does not own the note
            ValidationError: If a new title is invalid
        """
        note = await self._execute_db_operation("get_note", self.repo.get_by_id(note_id))
        await self.policy.authorize(NoteAbility.UPDATE, actor, note)

        changes = data.model_dump(exclude_unset=True)
        if not changes:
            return note

        self._log_operation(
            "Updating note",
            note_id=note_id,
            actor_id=actor.id,
            fields=sorted(changes),
        )
        note.apply_changes(changes)

        return await self._execute_db_operation("update_note", self.repo.save(note))

    async def archive_note(self, actor: Actor, note_id: str) -> Note:
        """
        Archive an actor's note. Archiving an archived note is a no-op.

        Raises:
            NotFoundError: If note not found
            ForbiddenError: If the actor does not own the note
        """
        note = await self._execute_db_operation("get_note", self.repo.get_by_id(note_id))
        await self.policy.authorize(NoteAbility.ARCHIVE, actor, note)

        if not note.archive():
            self._log_debug("Note already archived", note_id=note_id)
            return note

        self._log_operation("Archiving note", note_id=note_id, actor_id=actor.id)
        return await self._execute_db_operation("archive_note", self.repo.save(note))

    async def list_notes(
        self,
        actor: Actor,
        archived: ArchivedFilter = ArchivedFilter.ACTIVE,
        search: str | None = None,
        page: int = 1,
    ) -> PagedResult[Note]:
        """
        List one page of the actor's notes.

        Args:
            actor: The acting identity; only their notes are returned
            archived: Archive state to include (active only by default)
            search: Case-insensitive substring of title or body
            page: Page number, starting at 1
        """
        query = NoteQuery(owner_id=actor.id, archived=archived, search=search, page=page)
        self._log_debug(
            "Listing notes",
            actor_id=actor.id,
            archived=archived.value,
            search=query.search,
            page=page,
        )
        return await self._execute_db_operation("list_notes", self.repo.query_page(query))

"""
Note Policy.

Decides whether an actor may create, update or archive a note.
Creation is gated by the per-owner quota; updating and archiving
are reserved to the note's owner.

Usage:
    policy = NotePolicy(NoteRepository(session))
    await policy.authorize(NoteAbility.UPDATE, actor, note)
"""

import enum

from sqlalchemy.exc import SQLAlchemyError

from notekeeper.core.exceptions import DatabaseError, ForbiddenError
from notekeeper.core.logging import get_logger
from notekeeper.core.security import Actor
from notekeeper.models.note import MAX_NOTES_PER_USER, Note
from notekeeper.repositories.note import NoteRepository

logger = get_logger(__name__)


class NoteAbility(str, enum.Enum):
    """Actions the policy decides on."""

    CREATE = "create"
    UPDATE = "update"
    ARCHIVE = "archive"


class NotePolicy:
    """Ownership and quota rules for notes."""

    def __init__(self, repo: NoteRepository, max_per_user: int = MAX_NOTES_PER_USER) -> None:
        self.repo = repo
        self.max_per_user = max_per_user

    async def create(self, actor: Actor) -> bool:
        """Allow creation while the actor owns fewer notes than the quota."""
        try:
            owned = await self.repo.count_by_owner(actor.id)
        except (SQLAlchemyError, DatabaseError) as e:
            logger.warning(
                "Quota count failed, denying create",
                extra={"actor_id": actor.id, "error": str(e)},
            )
            return False
        return owned < self.max_per_user

    def update(self, actor: Actor, note: Note) -> bool:
        """Only the owner may update a note."""
        return actor.id == note.owner_id

    def archive(self, actor: Actor, note: Note) -> bool:
        """Only the owner may archive a note."""
        return actor.id == note.owner_id

    async def allows(self, ability: NoteAbility, actor: Actor, note: Note | None = None) -> bool:
        """Evaluate one ability for an actor and, where needed, a target note."""
        if ability is NoteAbility.CREATE:
            return await self.create(actor)
        if note is None:
            raise ValueError(f"{ability.value} requires a target note")
        if ability is NoteAbility.UPDATE:
            return self.update(actor, note)
        return self.archive(actor, note)

    async def authorize(self, ability: NoteAbility, actor: Actor, note: Note | None = None) -> None:
        """
        Require an ability.

        Raises:
            ForbiddenError: If the policy denies the action
        """
        if not await self.allows(ability, actor, note):
            logger.info(
                "Policy denied action",
                extra={
                    "ability": ability.value,
                    "actor_id": actor.id,
                    "note_id": note.id if note is not None else None,
                },
            )
            raise ForbiddenError("This action is unauthorized.")

"""
Jotter Backend: Note Repository
================================

What:  Create / list / find / update / delete for notes.
How:   Thin async wrapper around an AsyncSession. Changes are flushed, not
       committed; the request's session dependency commits on success.
Who:   Constructed per request by NoteService.

Query plans:
    list_by_owner:  SELECT ... WHERE creator_id = :owner ORDER BY created_at, id
                    → idx_notes_creator_id
    find_by_id:     SELECT ... WHERE id = :id → primary key
"""

from datetime import datetime, timezone
from typing import Any, List, Optional

from sqlalchemy import asc, select
from sqlalchemy.ext.asyncio import AsyncSession

from jotter.exceptions import NotFoundError
from jotter.models.note import Note
from jotter.schemas.note import (
    NoteCreate,
    NoteUpdate,
    validate_note_create,
    validate_note_update,
)


class NoteRepository:
    """Data access for the `notes` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, owner_id: str, fields: Any) -> Note:
        """
        Inserts a note owned by `owner_id`.

        `fields` may be a raw payload or an already validated NoteCreate.
        Any creator or id in the payload is ignored.

        Raises:
            ValidationError: text missing, empty after trimming, or too long
        """
        data = fields if isinstance(fields, NoteCreate) else validate_note_create(fields)
        note = Note(
            text=data.text,
            completed=data.completed,
            creator_id=owner_id,
            created_at=datetime.now(timezone.utc),
        )
        self.db.add(note)
        await self.db.flush()
        return note

    async def list_by_owner(self, owner_id: str) -> List[Note]:
        """All notes created by `owner_id`, oldest first. Empty list if none."""
        result = await self.db.execute(
            select(Note)
            .where(Note.creator_id == owner_id)
            .order_by(asc(Note.created_at), asc(Note.id))
        )
        return list(result.scalars().all())

    async def find_by_id(self, note_id: str) -> Optional[Note]:
        """Returns the note or None. Does not check ownership."""
        result = await self.db.execute(select(Note).where(Note.id == note_id))
        return result.scalar_one_or_none()

    async def get(self, note_id: str) -> Note:
        """Like find_by_id, but a missing note raises NotFoundError."""
        note = await self.find_by_id(note_id)
        if note is None:
            raise NotFoundError(resource_id=note_id)
        return note

    async def update(self, note_id: str, partial_fields: Any) -> Note:
        """
        Applies a partial update. Only `completed` is mutable.

        The payload is validated before the note is touched, so a rejected
        update leaves the stored note unchanged.

        Raises:
            ValidationError: `completed` not a boolean, or other fields present
            NotFoundError:   no note with this id
        """
        data = (
            partial_fields
            if isinstance(partial_fields, NoteUpdate)
            else validate_note_update(partial_fields)
        )
        note = await self.get(note_id)
        note.completed = data.completed
        await self.db.flush()
        return note

    async def delete(self, note_id: str) -> Note:
        """
        Removes the note and returns it as it was before deletion.

        Raises:
            NotFoundError: no note with this id
        """
        note = await self.get(note_id)
        await self.db.delete(note)
        await self.db.flush()
        return note

"""
Jotter Backend: Note Service (Request Pipelines)
=================================================

What:  The create / list / get / update / delete pipelines for notes.
How:   Each method is a short linear pipeline with early exits:

           ┌─────────────┐   ┌────────────┐   ┌───────────┐   ┌──────────┐
           │ id format   │──▶│ find by id │──▶│ ownership │──▶│ payload  │──▶ repository
           │ (400)       │   │ (404)      │   │ (400)     │   │ (400)    │
           └─────────────┘   └────────────┘   └───────────┘   └──────────┘

       The same order applies to GET, PATCH and DELETE on /notes/{id}.
       Authentication (401) has already happened in the route dependency.
Who:   Called by route handlers in jotter.routes.notes.

Error Handling Strategy:
    Application exceptions propagate unchanged to the global handlers.
    SQLAlchemy errors are logged with context and wrapped in DatabaseError,
    which the API reports as a generic 500.
"""

import logging
from typing import Any, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from jotter.exceptions import DatabaseError, MalformedIdError
from jotter.identifiers import canonical_id, is_valid_id
from jotter.repositories.note_repository import NoteRepository
from jotter.schemas.note import NoteResponse, validate_note_update
from jotter.services.ownership import ensure_owner

logger = logging.getLogger(__name__)


def _check_id(note_id: str) -> str:
    """Rejects malformed ids before any storage access; returns the stored form."""
    if not is_valid_id(note_id):
        raise MalformedIdError(resource_id=note_id)
    return canonical_id(note_id)


class NoteService:
    """
    Business logic layer for note operations.

    Stateless: every call receives the request's session and principal.
    """

    async def create_note(self, db: AsyncSession, principal: Any, payload: Any) -> NoteResponse:
        """
        POST /notes: validate payload, then insert with creator = principal.

        Raises:
            ValidationError: payload fails the note schema
            DatabaseError:   insert failed
        """
        try:
            note = await NoteRepository(db).create(principal.id, payload)
        except SQLAlchemyError as e:
            logger.error("Database error creating note for %s: %s", principal.id, str(e))
            raise DatabaseError(
                message="Could not create the note. Please try again.",
                context={"user_id": principal.id, "error_type": type(e).__name__},
            )
        logger.info("Note %s created by %s", note.id, principal.id)
        return NoteResponse.model_validate(note)

    async def list_notes(self, db: AsyncSession, principal: Any) -> List[NoteResponse]:
        """GET /notes: every note of the principal, insertion order."""
        try:
            notes = await NoteRepository(db).list_by_owner(principal.id)
        except SQLAlchemyError as e:
            logger.error("Database error listing notes for %s: %s", principal.id, str(e))
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"user_id": principal.id, "error_type": type(e).__name__},
            )
        return [NoteResponse.model_validate(note) for note in notes]

    async def get_note(self, db: AsyncSession, principal: Any, note_id: str) -> NoteResponse:
        """
        GET /notes/{id}

        Raises:
            MalformedIdError: id is not a valid identifier
            NotFoundError:    no such note
            OwnershipError:   note belongs to someone else
        """
        note_id = _check_id(note_id)
        try:
            note = await NoteRepository(db).get(note_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the note. Please try again.",
                context={"note_id": note_id, "error_type": type(e).__name__},
            )
        ensure_owner(principal, note)
        return NoteResponse.model_validate(note)

    async def update_note(
        self,
        db: AsyncSession,
        principal: Any,
        note_id: str,
        payload: Any,
    ) -> NoteResponse:
        """
        PATCH /notes/{id}: only `completed` may change.

        Raises:
            MalformedIdError, NotFoundError, OwnershipError (in that order), then
            ValidationError: "Completed Must be Boolean" / "Invalid Updates"
        """
        note_id = _check_id(note_id)
        repository = NoteRepository(db)
        try:
            note = await repository.get(note_id)
            ensure_owner(principal, note)
            changes = validate_note_update(payload)
            note = await repository.update(note_id, changes)
        except SQLAlchemyError as e:
            logger.error("Database error updating note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not update the note. Please try again.",
                context={"note_id": note_id, "error_type": type(e).__name__},
            )
        logger.info("Note %s updated by %s: completed=%s", note_id, principal.id, note.completed)
        return NoteResponse.model_validate(note)

    async def delete_note(self, db: AsyncSession, principal: Any, note_id: str) -> NoteResponse:
        """
        DELETE /notes/{id}

        Raises:
            MalformedIdError, NotFoundError, OwnershipError (in that order)
        """
        note_id = _check_id(note_id)
        repository = NoteRepository(db)
        try:
            note = await repository.get(note_id)
            ensure_owner(principal, note)
            deleted = NoteResponse.model_validate(note)
            await repository.delete(note_id)
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"note_id": note_id, "error_type": type(e).__name__},
            )
        logger.info("Note %s deleted by %s", note_id, principal.id)
        return deleted


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()

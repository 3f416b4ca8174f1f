"""
Jotter Backend: Notes Route Handlers
=====================================

What:  POST/GET /notes and GET/PATCH/DELETE /notes/{note_id}.
How:   Every handler depends on get_current_principal (401 before anything
       else), then delegates to NoteService and returns its result.
       Error bodies are produced by the global exception handlers.
Who:   Called by API clients with `Authorization: Bearer <token>`.

Status codes:
    POST   /notes        201  (400, 401)
    GET    /notes        200  (401)
    GET    /notes/{id}   200  (400 malformed id or not owner, 401, 404)
    PATCH  /notes/{id}   201  (400, 401, 404)
    DELETE /notes/{id}   200  (400, 401, 404)

PATCH answers 201 rather than 200; existing clients depend on it.
"""

import logging
from typing import Any, List

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from jotter.auth import Principal, get_current_principal
from jotter.database import get_db_session
from jotter.schemas.note import ErrorResponse, NoteResponse
from jotter.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["Notes"])

_AUTH_ERROR = {401: {"description": "Missing or invalid bearer token", "model": ErrorResponse}}
_ID_ERRORS = {
    400: {"description": "Malformed note id, or note owned by another user", "model": ErrorResponse},
    404: {"description": "Note Not Found", "model": ErrorResponse},
}


@router.post(
    "",
    status_code=201,
    response_model=NoteResponse,
    responses={
        400: {"description": "Payload failed validation", "model": ErrorResponse},
        **_AUTH_ERROR,
    },
    summary="Create a note",
    description=(
        "Creates a note owned by the authenticated user. Text is trimmed and "
        "lowercased and must be 1-50 characters. Any creatorId in the body is ignored."
    ),
)
async def create_note(
    payload: Any = Body(default=None),
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.create_note(db=db, principal=principal, payload=payload)


@router.get(
    "",
    response_model=List[NoteResponse],
    responses={**_AUTH_ERROR},
    summary="List my notes",
    description="Returns every note created by the authenticated user, oldest first.",
)
async def list_notes(
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    """An empty array (never 404) when the user has no notes."""
    return await note_service.list_notes(db=db, principal=principal)


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses={**_ID_ERRORS, **_AUTH_ERROR},
    summary="Get a single note",
)
async def get_note(
    note_id: str,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    Args:
        note_id: taken as a plain string so that a malformed id is rejected by
                 our identifier check (400), not by FastAPI's path parsing.
    """
    return await note_service.get_note(db=db, principal=principal, note_id=note_id)


@router.patch(
    "/{note_id}",
    status_code=201,
    response_model=NoteResponse,
    responses={**_ID_ERRORS, **_AUTH_ERROR},
    summary="Mark a note completed or not",
    description='Only {"completed": <boolean>} is accepted.',
)
async def update_note(
    note_id: str,
    payload: Any = Body(default=None),
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.update_note(
        db=db, principal=principal, note_id=note_id, payload=payload
    )


@router.delete(
    "/{note_id}",
    response_model=NoteResponse,
    responses={**_ID_ERRORS, **_AUTH_ERROR},
    summary="Delete a note",
    description="Permanently removes the note and returns it as it was.",
)
async def delete_note(
    note_id: str,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.delete_note(db=db, principal=principal, note_id=note_id)

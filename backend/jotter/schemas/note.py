"""
Jotter Backend: Note Request/Response Schemas
==============================================

What:  Pydantic models defining the notes API contract, plus the pure
       validation functions services use to check incoming payloads.
How:   Request payloads are validated explicitly by the service layer (not
       by FastAPI's body parsing) so that identifier, existence and ownership
       checks always run before payload checks. Validation failures are
       converted into jotter.exceptions.ValidationError with the exact
       client-facing message.
Who:   Used by NoteService (validation) and route handlers (response models).

Response keys are camelCase: id, text, completed, creatorId, createdAt.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from jotter.exceptions import COMPLETED_MUST_BE_BOOLEAN, ValidationError
from jotter.models.note import NOTE_TEXT_MAX_LENGTH

TEXT_REQUIRED = "Text is required"
TEXT_MUST_BE_STRING = "Text must be a string"
TEXT_TOO_LONG = f"Text must be at most {NOTE_TEXT_MAX_LENGTH} characters"
INVALID_UPDATES = "Invalid Updates"

# Fields a client may change after creation
UPDATABLE_FIELDS = frozenset({"completed"})


def _require_boolean(value: Any) -> bool:
    # bool only: 0/1 and "true" are rejected rather than coerced
    if not isinstance(value, bool):
        raise PydanticCustomError("completed_type", COMPLETED_MUST_BE_BOOLEAN)
    return value


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """
    Payload for POST /notes.

    Unknown keys (including any client-supplied creatorId or id) are dropped;
    ownership always comes from the authenticated user.
    """

    model_config = ConfigDict(extra="ignore")

    text: Optional[str] = Field(default=None, validate_default=True)
    completed: bool = False

    @field_validator("text", mode="before")
    @classmethod
    def normalize_text(cls, v: Any) -> str:
        """Trims and lowercases, then enforces 1-50 characters."""
        if v is None:
            raise PydanticCustomError("text_required", TEXT_REQUIRED)
        if not isinstance(v, str):
            raise PydanticCustomError("text_type", TEXT_MUST_BE_STRING)
        normalized = v.strip().lower()
        if not normalized:
            raise PydanticCustomError("text_required", TEXT_REQUIRED)
        if len(normalized) > NOTE_TEXT_MAX_LENGTH:
            raise PydanticCustomError("text_too_long", TEXT_TOO_LONG)
        return normalized

    @field_validator("completed", mode="before")
    @classmethod
    def check_completed(cls, v: Any) -> bool:
        return _require_boolean(v)


class NoteUpdate(BaseModel):
    """Payload for PATCH /notes/{id}. Only `completed` may be changed."""

    completed: Optional[bool] = Field(default=None, validate_default=True)

    @model_validator(mode="before")
    @classmethod
    def only_updatable_fields(cls, data: Any) -> Any:
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise PydanticCustomError("invalid_updates", INVALID_UPDATES)
        if set(data) - UPDATABLE_FIELDS:
            raise PydanticCustomError("invalid_updates", INVALID_UPDATES)
        return data

    @field_validator("completed", mode="before")
    @classmethod
    def check_completed(cls, v: Any) -> bool:
        return _require_boolean(v)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    What:  Full representation of a note.
    Who:   Returned by every /notes endpoint that yields a note.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(description="24-hex note identifier")
    text: str = Field(description="Normalized note text")
    completed: bool = Field(description="Whether the note is done")
    creator_id: str = Field(description="Identifier of the owning user")
    created_at: datetime = Field(description="Creation timestamp (UTC ISO 8601)")


class ErrorResponse(BaseModel):
    """
    Error body returned by every failing endpoint.

    Example:
        {"error": "Note Not Found"}
    """

    error: str = Field(description="Human-readable error message")


# ══════════════════════════════════════════════════════════════════════════
# Validation Functions
# ══════════════════════════════════════════════════════════════════════════


def _first_message(exc: PydanticValidationError) -> str:
    errors = exc.errors()
    return errors[0]["msg"] if errors else "Validation failed"


def _first_field(exc: PydanticValidationError) -> Optional[str]:
    errors = exc.errors()
    if errors and errors[0].get("loc"):
        return str(errors[0]["loc"][0])
    return None


def validate_note_create(payload: Any) -> NoteCreate:
    """
    Validates a POST /notes body.

    Raises:
        ValidationError: with the first failing rule's message
    """
    try:
        return NoteCreate.model_validate(payload if payload is not None else {})
    except PydanticValidationError as exc:
        raise ValidationError(message=_first_message(exc), field=_first_field(exc))


def validate_note_update(payload: Any) -> NoteUpdate:
    """
    Validates a PATCH /notes/{id} body.

    Raises:
        ValidationError: "Completed Must be Boolean" or "Invalid Updates"
    """
    try:
        return NoteUpdate.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(message=_first_message(exc), field=_first_field(exc))

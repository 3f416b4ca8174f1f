"""
Jotter Backend: Note Schema Validation Tests
=============================================

What we test:
    ✅ Text is trimmed, lowercased, and limited to 1-50 characters
    ✅ creatorId and other unknown keys are dropped on create
    ✅ Updates accept only a boolean `completed`
    ✅ Responses serialize with camelCase keys
"""

from datetime import datetime, timezone

import pytest

from jotter.exceptions import COMPLETED_MUST_BE_BOOLEAN, ValidationError
from jotter.schemas.note import (
    INVALID_UPDATES,
    TEXT_MUST_BE_STRING,
    TEXT_REQUIRED,
    TEXT_TOO_LONG,
    NoteResponse,
    validate_note_create,
    validate_note_update,
)


class TestValidateNoteCreate:

    @pytest.mark.parametrize("raw, expected", [
        ("note1", "note1"),
        ("  Buy MILK  ", "buy milk"),
        ("A", "a"),
        ("x" * 50, "x" * 50),
        ("  " + "Y" * 50 + "\t", "y" * 50),
    ])
    def test_text_is_normalized(self, raw, expected):
        assert validate_note_create({"text": raw}).text == expected

    def test_completed_defaults_to_false(self):
        assert validate_note_create({"text": "a"}).completed is False

    def test_creator_in_payload_is_ignored(self):
        data = validate_note_create({"text": "a", "creatorId": "5e547e0d22e5ea5888ca32d2", "creator": "x"})
        assert not hasattr(data, "creatorId")
        assert "creator" not in data.model_dump()

    @pytest.mark.parametrize("payload, message", [
        ({}, TEXT_REQUIRED),
        (None, TEXT_REQUIRED),
        ({"text": ""}, TEXT_REQUIRED),
        ({"text": "     "}, TEXT_REQUIRED),
        ({"text": None}, TEXT_REQUIRED),
        ({"text": 42}, TEXT_MUST_BE_STRING),
        ({"text": "x" * 51}, TEXT_TOO_LONG),
        ({"text": "ok", "completed": "yes"}, COMPLETED_MUST_BE_BOOLEAN),
    ])
    def test_invalid_payloads(self, payload, message):
        with pytest.raises(ValidationError) as exc_info:
            validate_note_create(payload)
        assert exc_info.value.message == message


class TestValidateNoteUpdate:

    @pytest.mark.parametrize("value", [True, False])
    def test_boolean_completed(self, value):
        assert validate_note_update({"completed": value}).completed is value

    @pytest.mark.parametrize("payload", [
        {"completed": 1234},
        {"completed": 1},
        {"completed": "true"},
        {"completed": None},
        {},
        None,
    ])
    def test_non_boolean_completed(self, payload):
        with pytest.raises(ValidationError) as exc_info:
            validate_note_update(payload)
        assert exc_info.value.message == COMPLETED_MUST_BE_BOOLEAN

    @pytest.mark.parametrize("payload", [
        {"completed": True, "text": "changed"},
        {"creatorId": "5e547e0d22e5ea5888ca32d2"},
        ["completed"],
    ])
    def test_other_fields_rejected(self, payload):
        with pytest.raises(ValidationError) as exc_info:
            validate_note_update(payload)
        assert exc_info.value.message == INVALID_UPDATES


class TestNoteResponse:

    def test_camel_case_keys(self):
        response = NoteResponse(
            id="5e4983e0186afc3c3b684bbb",
            text="note1",
            completed=False,
            creator_id="5e79abee7dd41859dfd6746e",
            created_at=datetime(2020, 3, 24, tzinfo=timezone.utc),
        )
        dumped = response.model_dump(by_alias=True)
        assert set(dumped) == {"id", "text", "completed", "creatorId", "createdAt"}
        assert dumped["creatorId"] == "5e79abee7dd41859dfd6746e"

"""
Jotter Backend: Ownership Guard Tests
======================================

What we test:
    ✅ Creator is allowed, anyone else is denied
    ✅ Denial raises OwnershipError with a body-safe message
"""

from types import SimpleNamespace

import pytest

from jotter.exceptions import INVALID_NOTE_ID, OwnershipError
from jotter.services.ownership import authorize, ensure_owner

OWNER_ID = "5e79abee7dd41859dfd6746e"
STRANGER_ID = "5e547e0d22e5ea5888ca32d2"


def _note(creator_id=OWNER_ID):
    return SimpleNamespace(id="5e4983e0186afc3c3b684bbb", text="note1", creator_id=creator_id)


class TestAuthorize:

    def test_creator_is_allowed(self):
        assert authorize(SimpleNamespace(id=OWNER_ID), _note()) is True

    def test_other_user_is_denied(self):
        assert authorize(SimpleNamespace(id=STRANGER_ID), _note()) is False

    def test_principal_without_id_is_denied(self):
        assert authorize(SimpleNamespace(id=None), _note(creator_id=None)) is False


class TestEnsureOwner:

    def test_owner_passes(self):
        ensure_owner(SimpleNamespace(id=OWNER_ID), _note())

    def test_stranger_raises(self):
        with pytest.raises(OwnershipError) as exc_info:
            ensure_owner(SimpleNamespace(id=STRANGER_ID), _note())

        exc = exc_info.value
        assert exc.status_code == 400
        assert exc.message == INVALID_NOTE_ID
        assert "note1" not in exc.message
        # The id is kept for logs only
        assert exc.context["resource_id"] == "5e4983e0186afc3c3b684bbb"

"""
Jotter Backend: Ownership Guard
================================

What:  Decides whether a principal may view, modify or delete a note.
How:   A single fixed relation: allowed iff note.creator_id == principal.id.
       There are no roles, shares or policies.
Who:   Called by NoteService after the note has been fetched.

Denial is reported as OwnershipError, which the API renders exactly like a
malformed id (400, {"error": "Invalid Note ID"}); the note's id and text are
never placed in the response.
"""

import logging
from typing import Any

from jotter.exceptions import OwnershipError

logger = logging.getLogger(__name__)


def authorize(principal: Any, resource: Any) -> bool:
    """True iff `principal` created `resource`."""
    principal_id = getattr(principal, "id", None)
    creator_id = getattr(resource, "creator_id", None)
    return principal_id is not None and creator_id == principal_id


def ensure_owner(principal: Any, resource: Any) -> None:
    """
    Raises:
        OwnershipError: `principal` is not the creator of `resource`
    """
    if not authorize(principal, resource):
        logger.warning(
            "Ownership denied: user %s on note %s",
            getattr(principal, "id", None),
            getattr(resource, "id", None),
        )
        raise OwnershipError(
            resource_id=getattr(resource, "id", None),
            principal_id=getattr(principal, "id", None),
        )

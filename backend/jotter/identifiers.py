"""
Jotter Backend: Resource Identifiers
=====================================

What:  Generation and format validation of resource identifiers.
How:   Identifiers follow the 12-byte object-id layout, rendered as 24 hex
       characters:

           ┌──────────────┬──────────────────┬─────────────┐
           │ 4B timestamp │ 5B process nonce │ 3B counter  │
           └──────────────┴──────────────────┴─────────────┘

       Ids produced by one process sort in generation order.

The format is pluggable. Routes and services only call `is_valid_id()`,
`canonical_id()` and `new_object_id()`; a deployment on a store with a
different native id scheme installs its own `IdentifierFormat` via
`set_identifier_format()`.
"""

import itertools
import os
import re
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable

OBJECT_ID_LENGTH = 24

_OBJECT_ID_RE = re.compile(r"[0-9a-fA-F]{24}")

_process_nonce = os.urandom(5)
_counter = itertools.count(int.from_bytes(os.urandom(3), "big"))
_counter_lock = threading.Lock()


def is_object_id(value: Any) -> bool:
    """True iff `value` is a string of exactly 24 hexadecimal characters."""
    return isinstance(value, str) and _OBJECT_ID_RE.fullmatch(value) is not None


def generate_object_id() -> str:
    """Returns a new 24-character lowercase hex object id."""
    with _counter_lock:
        count = next(_counter) & 0xFFFFFF
    raw = (
        int(time.time()).to_bytes(4, "big")
        + _process_nonce
        + count.to_bytes(3, "big")
    )
    return raw.hex()


@dataclass(frozen=True)
class IdentifierFormat:
    """
    One identifier scheme.

    `canonical` maps every accepted spelling of an id to the form it is
    stored under; lookups always go through it.
    """

    name: str
    validate: Callable[[Any], bool]
    generate: Callable[[], str]
    canonical: Callable[[str], str] = str


OBJECT_ID_FORMAT = IdentifierFormat(
    name="object_id",
    validate=is_object_id,
    generate=generate_object_id,
    canonical=str.lower,
)

_active_format = OBJECT_ID_FORMAT


def set_identifier_format(fmt: IdentifierFormat) -> IdentifierFormat:
    """Installs `fmt` as the active format and returns the previous one."""
    global _active_format
    previous = _active_format
    _active_format = fmt
    return previous


def is_valid_id(value: Any) -> bool:
    """Checks `value` against the active identifier format."""
    return _active_format.validate(value)


def canonical_id(value: str) -> str:
    """Normalizes a valid id to its stored form (object ids: lowercase hex)."""
    return _active_format.canonical(value)


def new_object_id() -> str:
    """Generates an identifier in the active format (ORM column default)."""
    return _active_format.generate()

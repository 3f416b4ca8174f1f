"""
Jotter Backend: Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for every failure the API reports.
How:   Each exception class carries a client-safe message and an optional
       context dict. Global exception handlers (registered in main.py) catch
       these and return a JSON body of the form {"error": <message>}.
Who:   Raised by services, repositories and the auth dependency.
When:  During request processing when recoverable errors occur.

Exception Hierarchy:
    JotterError (base)
    ├── AuthError           → 401 Unauthorized
    ├── MalformedIdError    → 400 Bad Request
    ├── ValidationError     → 400 Bad Request (message surfaced verbatim)
    ├── OwnershipError      → 400 Bad Request (same body as MalformedIdError)
    ├── NotFoundError       → 404 Not Found
    └── DatabaseError       → 500 Internal Server Error

The message strings below are part of the public contract; clients and
tests compare them byte for byte.
"""

from typing import Any, Dict, Optional


NOTE_NOT_FOUND = "Note Not Found"
INVALID_NOTE_ID = "Invalid Note ID"
COMPLETED_MUST_BE_BOOLEAN = "Completed Must be Boolean"
PLEASE_AUTHENTICATE = "Please authenticate"


class JotterError(Exception):
    """
    Base exception for all Jotter application errors.

    Attributes:
        message:     User-facing error description (returned in the API response)
        context:     Additional debug info (logged but NOT returned to client)
        status_code: HTTP status the global handler responds with
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class AuthError(JotterError):
    """
    Raised when a request has no bearer token, or the token is invalid,
    expired, or no longer registered for its user.

    HTTP: 401 Unauthorized. Raised by the auth dependency before any
    route-specific logic runs.
    """

    status_code = 401

    def __init__(
        self,
        message: str = PLEASE_AUTHENTICATE,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class MalformedIdError(JotterError):
    """
    Raised when a path identifier does not match the store's identifier format.

    HTTP: 400 Bad Request. Raised before any storage access, so a malformed id
    never produces a "not found".
    """

    status_code = 400

    def __init__(
        self,
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=INVALID_NOTE_ID, context=ctx)


class ValidationError(JotterError):
    """
    Raised when a request payload fails schema or type constraints.

    HTTP: 400 Bad Request, with the message returned verbatim.

    Example response:
        {"error": "Completed Must be Boolean"}
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class OwnershipError(JotterError):
    """
    Raised when the authenticated user is not the creator of the resource.

    HTTP: 400 Bad Request. The response body is identical to the one for a
    malformed id and never contains the resource's id or content. The
    resource id is kept in `context` for server-side logs only.
    """

    status_code = 400

    def __init__(
        self,
        resource_id: Optional[str] = None,
        principal_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        if principal_id is not None:
            ctx["principal_id"] = principal_id
        super().__init__(message=INVALID_NOTE_ID, context=ctx)


class NotFoundError(JotterError):
    """
    Raised when a well-formed identifier matches no stored resource.

    HTTP: 404 Not Found, body {"error": "Note Not Found"}.
    """

    status_code = 404

    def __init__(
        self,
        message: str = NOTE_NOT_FOUND,
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(JotterError):
    """
    Raised when database operations fail unexpectedly.

    HTTP: 500 Internal Server Error.

    Security Note:
        The message returned to the client is always generic.
        Detailed error info is logged server-side only.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

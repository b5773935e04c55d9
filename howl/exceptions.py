"""
Howl Backend — Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions for the three failure classes the API knows.
Why:   Services raise these; global handlers in main.py turn them into JSON
       responses with the right status code. Routes never build error bodies.
How:   Each exception carries a client-safe message and an optional context
       dict. Context is logged server-side and only exposed for 400s.

Exception Hierarchy:
    HowlError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found (shared fallback responder)
    └── StorageError      → 500 Internal Server Error (details logged only)
"""

from typing import Any, Dict, Optional


class HowlError(Exception):
    """
    Base exception for all Howl application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, not returned for server errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(HowlError):
    """
    Raised when a submitted record does not satisfy its schema.

    HTTP: 400 Bad Request

    Example response:
        {
            "error": "Request body is not a valid business object",
            "details": {"missing": ["phone"]}
        }
    """

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


class NotFoundError(HowlError):
    """
    Raised when an identifier has no matching record.

    HTTP: 404 Not Found

    The response body is produced by the same fallback responder that
    handles unmatched URLs, so the handler only names what was missing.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StorageError(HowlError):
    """
    Raised when a database operation fails.

    HTTP: 500 Internal Server Error

    The message returned to the client is generic. The original exception
    type and query context go to the server log only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

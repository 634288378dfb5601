"""
Notefile Backend — Custom Exception Hierarchy
==============================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by the store and the note service; caught by global handlers.

Exception Hierarchy:
    NotefileError (base)
    ├── ValidationError              → 400 Bad Request (client can fix)
    ├── NotFoundError                → 404 Not Found
    └── StorageError                 → 500 Internal Server Error
        ├── StorageReadError         (file cannot be read)
        ├── StorageParseError        (content is not a JSON array of notes)
        ├── StorageSerializeError    (collection cannot be encoded)
        └── StorageWriteError        (file cannot be written)

    The client cannot tell a disk failure from a corrupt file: every
    StorageError renders the same generic 500 body. The subclass and its
    context are only visible in the server log.
"""

from typing import Any, Dict, Optional


class NotefileError(Exception):
    """
    Base exception for all Notefile application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotefileError):
    """
    Raised when client input fails validation.

    When:    Path id is not an integer, body is malformed, or a required
             field is empty on create.
    HTTP:    400 Bad Request

    Example response:
        {
          "error": "validation_error",
          "message": "Note id 'abc' is not an integer",
          "details": {"field": "id"}
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


class NotFoundError(NotefileError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PATCH/DELETE /notes/{id} with an id absent from the collection.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StorageError(NotefileError):
    """
    Raised when the notes file cannot be read, parsed, encoded or written.

    HTTP:    500 Internal Server Error

    Recovery:
        None. The request fails immediately; no retry is attempted.
        The file on disk is left as it was before the request.
    """

    def __init__(
        self,
        message: str = "Note storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StorageReadError(StorageError):
    """The notes file could not be opened or read."""

    def __init__(self, message: str = "Could not read the notes file", context=None):
        super().__init__(message=message, context=context)


class StorageParseError(StorageError):
    """The notes file is not a JSON array of note objects."""

    def __init__(self, message: str = "The notes file is not a valid note array", context=None):
        super().__init__(message=message, context=context)


class StorageSerializeError(StorageError):
    """The in-memory collection could not be encoded as JSON."""

    def __init__(self, message: str = "Could not encode the note collection", context=None):
        super().__init__(message=message, context=context)


class StorageWriteError(StorageError):
    """The notes file could not be overwritten."""

    def __init__(self, message: str = "Could not write the notes file", context=None):
        super().__init__(message=message, context=context)

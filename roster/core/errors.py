"""Error taxonomy for roster use cases.

Services raise these; the HTTP layer maps them to status codes via
``status_code`` and renders ``message`` as ``{"error": ...}``.
"""

from __future__ import annotations


class RosterError(Exception):
    """Base class for roster failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RosterError):
    """Raised when a required field is missing or has an invalid value."""

    status_code = 400


class ConflictError(RosterError):
    """Raised when an id or email is already taken by another record."""

    status_code = 400


class NotFoundError(RosterError):
    """Raised when no record has the requested id."""

    status_code = 404


class StorageError(RosterError):
    """Raised when the backing store cannot be read or written."""

    status_code = 500

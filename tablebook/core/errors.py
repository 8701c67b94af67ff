from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_ARGUMENT = "InvalidArgument"
    NOT_FOUND = "NotFound"
    CONFLICT = "Conflict"
    STORE_ERROR = "StoreError"


class BookingError(Exception):
    """
    Base class for every classified failure raised by the booking core.

    Callers branch on `kind`, never on the message text.
    """
    kind: ErrorKind


class InvalidArgumentError(BookingError):
    """Raise to map to HTTP 422 (precondition violated by caller-supplied data)."""
    kind = ErrorKind.INVALID_ARGUMENT


class NotFoundError(BookingError):
    """Raise to map to HTTP 404."""
    kind = ErrorKind.NOT_FOUND


class ConflictError(BookingError):
    """Raise to map to HTTP 409 (overlapping booking or duplicate key)."""
    kind = ErrorKind.CONFLICT


class StoreError(BookingError):
    """Raise to map to HTTP 503 (persistence failure unrelated to validation)."""
    kind = ErrorKind.STORE_ERROR


class StoreNotInitializedError(StoreError):
    """The store handle was used before `Database.initialize()`."""

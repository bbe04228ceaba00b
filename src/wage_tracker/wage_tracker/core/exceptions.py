from __future__ import annotations

from .enums import ErrorKind


class DomainError(Exception):
    """Base exception for business rule violations.

    Every error carries an ``ErrorKind``; callers branch on ``kind`` rather
    than on the concrete class.
    """

    kind: ErrorKind = ErrorKind.INVALID_INPUT

    def __init__(self, message: str, kind: ErrorKind | None = None):
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = ErrorKind.INVALID_INPUT


class NotFoundError(DomainError):
    """Raised when the referenced resource does not exist for this user."""

    kind = ErrorKind.NOT_FOUND


class ConflictError(DomainError):
    """Raised when an operation would break the single-open-session rule."""

    kind = ErrorKind.CONFLICT


class AuthenticationError(DomainError):
    """Raised when no user identity is presented."""

    kind = ErrorKind.UNAUTHENTICATED


class StorageError(DomainError):
    """Raised when the backing store is unavailable or fails mid-operation."""

    kind = ErrorKind.STORAGE

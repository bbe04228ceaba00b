from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Failure categories surfaced to callers of the core."""

    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNAUTHENTICATED = "unauthenticated"
    STORAGE = "storage"


class SessionState(str, Enum):
    """A work session is open until its end time is recorded."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"


class StorageBackend(str, Enum):
    MEMORY = "memory"
    MYSQL = "mysql"

"""Public exception types for jsonvault."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import ClassVar


class ErrorKind(StrEnum):
    DATABASE = "database_error"
    FILE_NOT_FOUND = "file_not_found"
    VALIDATION = "validation_error"
    LOCK = "lock_error"
    FILE_SIZE = "file_size_error"


class DatabaseError(Exception):
    """Base class for all jsonvault exceptions.

    ``kind`` is a stable discriminant callers can branch on instead of
    matching message text.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.DATABASE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, object]:
        return {"kind": self.kind.value, "message": self.message}


class CollectionNotFoundError(DatabaseError, FileNotFoundError):
    """Raised when a collection or snapshot to delete or restore does not exist."""

    kind = ErrorKind.FILE_NOT_FOUND

    def __init__(self, path: str | Path) -> None:
        super().__init__(f"File not found: {path}")
        self.path = Path(path)

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, object]:
        return {**super().to_dict(), "path": str(self.path)}


class ValidationError(DatabaseError):
    """Raised for invalid names, schema violations and bad configuration."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, errors: list[str] | tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.errors = tuple(errors)

    def to_dict(self) -> dict[str, object]:
        return {**super().to_dict(), "errors": list(self.errors)}


class LockError(DatabaseError):
    """Raised when the write lock for a collection cannot be acquired."""

    kind = ErrorKind.LOCK

    def __init__(self, message: str, path: str | Path) -> None:
        super().__init__(message)
        self.path = Path(path)

    def to_dict(self) -> dict[str, object]:
        return {**super().to_dict(), "path": str(self.path)}


class FileSizeError(DatabaseError):
    """Raised when a serialized collection exceeds ``max_file_size``."""

    kind = ErrorKind.FILE_SIZE

    def __init__(self, path: str | Path, size: int, limit: int) -> None:
        super().__init__(
            f"File {path} size ({size} bytes) exceeds maximum allowed size ({limit} bytes)"
        )
        self.path = Path(path)
        self.size = size
        self.limit = limit

    def to_dict(self) -> dict[str, object]:
        return {
            **super().to_dict(),
            "path": str(self.path),
            "size": self.size,
            "limit": self.limit,
        }

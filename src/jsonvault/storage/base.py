"""Storage backend abstractions."""

from __future__ import annotations

from typing import Protocol

from ..models import SaveResult
from ..schema import Schema


class CollectionBackend(Protocol):
    """Protocol for persisting named record collections."""

    def read(self, name: str, schema: Schema | None = None) -> list[object]: ...
    def save(self, name: str, data: list[object], schema: Schema | None = None) -> SaveResult: ...
    def delete(self, name: str) -> None: ...
    def list_collections(self) -> list[str]: ...

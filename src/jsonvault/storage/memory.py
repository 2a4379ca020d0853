"""In-memory storage backend."""

from __future__ import annotations

import copy
from pathlib import Path

from ..config import ConfigHolder
from ..exceptions import CollectionNotFoundError, FileSizeError
from ..models import SaveResult
from ..schema import Schema, ensure_valid
from ..serializers import encode_records
from .names import sanitize_name


class MemoryStore:
    """In-memory store with the same gates as ``CollectionStore``.

    Good for tests and short-lived scripts.
    """

    def __init__(self, config: ConfigHolder | None = None) -> None:
        self.config = config or ConfigHolder()
        self._collections: dict[str, list[object]] = {}

    def read(self, name: str, schema: Schema | None = None) -> list[object]:
        records = self._collections.setdefault(sanitize_name(name), [])
        ensure_valid(records, schema)
        return copy.deepcopy(records)

    def save(self, name: str, data: list[object], schema: Schema | None = None) -> SaveResult:
        key = sanitize_name(name)
        if schema is not None and isinstance(data, list):
            ensure_valid(data, schema)
        size = len(encode_records(data))
        limit = self.config.get().max_file_size
        if size > limit:
            raise FileSizeError(key, size, limit)
        self._collections[key] = copy.deepcopy(data)
        return SaveResult(path=Path(key), size=size)

    def delete(self, name: str) -> None:
        key = sanitize_name(name)
        if key not in self._collections:
            raise CollectionNotFoundError(key)
        del self._collections[key]

    def list_collections(self) -> list[str]:
        return sorted(self._collections)

"""Storage backends."""

from .aio import AsyncCollectionStore
from .base import CollectionBackend
from .file import CollectionStore
from .memory import MemoryStore
from .names import resolve_collection_path, sanitize_name

__all__ = [
    "AsyncCollectionStore",
    "CollectionBackend",
    "CollectionStore",
    "MemoryStore",
    "resolve_collection_path",
    "sanitize_name",
]

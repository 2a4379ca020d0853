"""Awaitable facade over ``CollectionStore`` for asyncio applications."""

from __future__ import annotations

import asyncio
from pathlib import Path

from ..models import CollectionReport, SaveResult
from ..schema import Schema
from .file import CollectionStore


class AsyncCollectionStore:
    """Runs each store operation in a worker thread.

    Concurrent saves to the same collection are serialized by the file lock;
    saves to different collections do not wait on each other.
    """

    def __init__(self, store: CollectionStore) -> None:
        self.store = store

    async def read(self, name: str, schema: Schema | None = None) -> list[object]:
        return await asyncio.to_thread(self.store.read, name, schema)

    async def inspect(self, name: str, schema: Schema | None = None) -> CollectionReport:
        return await asyncio.to_thread(self.store.inspect, name, schema)

    async def save(self, name: str, data: list[object], schema: Schema | None = None) -> SaveResult:
        return await asyncio.to_thread(self.store.save, name, data, schema)

    async def delete(self, name: str) -> None:
        await asyncio.to_thread(self.store.delete, name)

    async def list_collections(self) -> list[str]:
        return await asyncio.to_thread(self.store.list_collections)

    async def get_backups(self, name: str) -> list[str]:
        return await asyncio.to_thread(self.store.get_backups, name)

    async def restore_from_backup(self, backup_path: str | Path, target_name: str) -> Path:
        return await asyncio.to_thread(self.store.restore_from_backup, backup_path, target_name)

"""jsonvault: a JSON-file-backed document store.

Convenience API (shares the process-wide configuration holder):
    jsonvault.open_store()        -> CollectionStore with a BackupManager attached
    jsonvault.default_config()    -> the shared ConfigHolder

DI API (construct your own collaborators):
    from jsonvault import BackupManager, CollectionStore, ConfigHolder, StoreConfig
    config = ConfigHolder(StoreConfig(data_directory="var/data"))
    store = CollectionStore(config, backups=BackupManager(config))
    store.save("users", [{"name": "ada"}])
"""

from __future__ import annotations

from .backup import BackupManager
from .config import ConfigHolder, StoreConfig, default_config
from .exceptions import (
    CollectionNotFoundError,
    DatabaseError,
    ErrorKind,
    FileSizeError,
    LockError,
    ValidationError,
)
from .hooks import NullHook, StoreHook
from .models import BackupSweep, CollectionReport, SaveResult
from .schema import (
    FieldKind,
    FieldSpec,
    Schema,
    ValidationResult,
    create_schema,
    validate_collection,
    validate_item,
)
from .storage import AsyncCollectionStore, CollectionStore, MemoryStore


def open_store(
    config: ConfigHolder | None = None,
    *,
    backups: bool = True,
    hooks: list[StoreHook] | None = None,
) -> CollectionStore:
    """Build a ``CollectionStore`` over ``config`` (the shared holder by default)."""
    holder = config or default_config()
    manager = BackupManager(holder) if backups else None
    return CollectionStore(holder, backups=manager, hooks=hooks)


__all__ = [
    "AsyncCollectionStore",
    "BackupManager",
    "BackupSweep",
    "CollectionNotFoundError",
    "CollectionReport",
    "CollectionStore",
    "ConfigHolder",
    "DatabaseError",
    "ErrorKind",
    "FieldKind",
    "FieldSpec",
    "FileSizeError",
    "LockError",
    "MemoryStore",
    "NullHook",
    "SaveResult",
    "Schema",
    "StoreConfig",
    "StoreHook",
    "ValidationError",
    "ValidationResult",
    "create_schema",
    "default_config",
    "open_store",
    "validate_collection",
    "validate_item",
]

"""File-backed collection store: one JSON array file per collection."""

from __future__ import annotations

import os
import tempfile
import warnings
from pathlib import Path
from typing import TYPE_CHECKING

from ..config import ConfigHolder
from ..exceptions import CollectionNotFoundError, DatabaseError, FileSizeError
from ..hooks import StoreHook, dispatch
from ..models import CollectionReport, SaveResult
from ..schema import Schema, ensure_valid, validate_collection
from ..serializers import encode_records, loads_records
from .locks import write_lock
from .names import (
    COLLECTION_SUFFIX,
    DIRECTORY_MODE,
    FILE_MODE,
    resolve_collection_path,
    sanitize_name,
)

if TYPE_CHECKING:
    from ..backup import BackupManager

_EMPTY_COLLECTION = b"[]"


class CollectionStore:
    """Reads and writes collections under the configured data directory.

    Error-handling contract
    ----------------------
    - Name, schema and size checks raise before any file is touched.
    - ``save`` holds the collection's write lock for the write and the
      snapshot, and releases it on every exit path.
    - A failed snapshot never fails a save: it is reported through
      ``SaveResult.backup_error``, ``warnings.warn`` and the
      ``on_backup_failed`` hook.
    """

    def __init__(
        self,
        config: ConfigHolder | None = None,
        backups: BackupManager | None = None,
        hooks: list[StoreHook] | None = None,
    ) -> None:
        self.config = config or ConfigHolder()
        self.backups = backups
        self.hooks: list[StoreHook] = hooks or []

    def path_for(self, name: str) -> Path:
        return resolve_collection_path(self.config.get().data_directory, name)

    def read(self, name: str, schema: Schema | None = None) -> list[object]:
        """Load a collection, creating it empty if it does not exist yet.

        With ``schema``, any non-conforming record raises ``ValidationError``.
        """
        path = self._prepare(name)
        if not path.exists():
            self._create_empty(path)
        try:
            payload = path.read_bytes()
        except OSError as exc:
            raise DatabaseError(f"Failed to read {path}: {exc}") from exc
        records = loads_records(payload, path)
        ensure_valid(records, schema)
        return records

    def inspect(self, name: str, schema: Schema | None = None) -> CollectionReport:
        """Load a collection and report schema violations without raising."""
        records = self.read(name)
        return CollectionReport(
            name=sanitize_name(name),
            records=records,
            validation=validate_collection(records, schema),
        )

    def save(self, name: str, data: list[object], schema: Schema | None = None) -> SaveResult:
        config = self.config.get()
        path = self.path_for(name)
        if schema is not None and isinstance(data, list):
            ensure_valid(data, schema)
        encoded = encode_records(data)
        if len(encoded) > config.max_file_size:
            raise FileSizeError(path, len(encoded), config.max_file_size)

        self._ensure_data_directory(path.parent)
        with write_lock(path, config.lock_timeout):
            self._write_atomic(path, encoded)
            result = SaveResult(path=path, size=len(encoded))
            if config.backup_enabled and self.backups is not None:
                result = self._snapshot(self.backups, result)

        dispatch(self.hooks, "on_saved", path.name, result)
        return result

    def delete(self, name: str) -> None:
        path = self.path_for(name)
        if not path.exists():
            raise CollectionNotFoundError(path)
        try:
            path.unlink()
        except FileNotFoundError as exc:
            raise CollectionNotFoundError(path) from exc
        except OSError as exc:
            raise DatabaseError(f"Failed to delete {path}: {exc}") from exc
        dispatch(self.hooks, "on_deleted", path.name, path)

    def list_collections(self) -> list[str]:
        directory = Path(self.config.get().data_directory)
        self._ensure_data_directory(directory)
        try:
            return sorted(
                entry.name
                for entry in directory.iterdir()
                if entry.name.endswith(COLLECTION_SUFFIX) and entry.is_file()
            )
        except OSError as exc:
            raise DatabaseError(f"Failed to list {directory}: {exc}") from exc

    def get_backups(self, name: str) -> list[str]:
        return self._require_backups().list_backups(sanitize_name(name))

    def restore_from_backup(self, backup_path: str | Path, target_name: str) -> Path:
        return self._require_backups().restore_from_backup(backup_path, sanitize_name(target_name))

    def _prepare(self, name: str) -> Path:
        path = self.path_for(name)
        self._ensure_data_directory(path.parent)
        return path

    def _snapshot(self, backups: BackupManager, result: SaveResult) -> SaveResult:
        try:
            backup_path = backups.backup_file(result.path.name)
        except DatabaseError as exc:
            warnings.warn(
                f"jsonvault: failed to back up {result.path.name}: {exc}. "
                "The save itself succeeded.",
                stacklevel=3,
            )
            dispatch(self.hooks, "on_backup_failed", result.path.name, exc)
            return result.model_copy(update={"backup_error": str(exc)})
        return result.model_copy(update={"backup_path": backup_path})

    def _require_backups(self) -> BackupManager:
        if self.backups is None:
            raise DatabaseError("No backup manager is attached to this store")
        return self.backups

    @staticmethod
    def _ensure_data_directory(directory: Path) -> None:
        try:
            directory.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
        except OSError as exc:
            raise DatabaseError(f"Failed to create data directory {directory}: {exc}") from exc

    @staticmethod
    def _create_empty(path: Path) -> None:
        try:
            fd = os.open(path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, FILE_MODE)
            with os.fdopen(fd, "wb") as handle:
                handle.write(_EMPTY_COLLECTION)
        except FileExistsError:
            pass
        except OSError as exc:
            raise DatabaseError(f"Failed to create {path}: {exc}") from exc

    @staticmethod
    def _write_atomic(path: Path, encoded: bytes) -> None:
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(encoded)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise DatabaseError(f"Failed to write {path}: {exc}") from exc

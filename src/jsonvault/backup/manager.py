"""Timestamped snapshots of collection files."""

from __future__ import annotations

import os
import shutil
import warnings
from datetime import UTC, datetime
from pathlib import Path
from types import TracebackType

from ..config import ConfigHolder
from ..exceptions import CollectionNotFoundError, DatabaseError
from ..models import BackupSweep
from ..serializers import loads_records
from ..storage.locks import write_lock
from ..storage.names import (
    COLLECTION_SUFFIX,
    DIRECTORY_MODE,
    FILE_MODE,
    resolve_collection_path,
)
from .timer import RecurringTask


def snapshot_name(name: str, now: datetime | None = None) -> str:
    """``users.json`` -> ``users_2024-05-01T12-30-00-123456Z.json``."""
    moment = (now or datetime.now(UTC)).astimezone(UTC)
    stamp = moment.strftime("%Y-%m-%dT%H:%M:%S.%fZ").replace(":", "-").replace(".", "-")
    return f"{Path(name).stem}_{stamp}{COLLECTION_SUFFIX}"


class BackupManager:
    """Copies collection files into the configured backup directory.

    Error-handling contract
    ----------------------
    - ``backup_file`` and ``restore_from_backup`` raise ``DatabaseError``
      subclasses; callers decide whether a failure matters.
    - ``backup_all`` never raises for a single file: failures are recorded in
      the returned ``BackupSweep`` and reported with ``warnings.warn``.
    """

    def __init__(self, config: ConfigHolder) -> None:
        self.config = config
        self._timer = RecurringTask(
            self.backup_all,
            lambda: self.config.get().backup_interval / 1000,
            name="jsonvault-auto-backup",
        )

    def backup_file(self, name: str) -> Path:
        config = self.config.get()
        source = resolve_collection_path(config.data_directory, name)
        if not source.exists():
            raise CollectionNotFoundError(source)
        target = self._backup_directory() / snapshot_name(source.name)
        try:
            shutil.copyfile(source, target)
            os.chmod(target, FILE_MODE)
        except OSError as exc:
            raise DatabaseError(f"Failed to back up {source}: {exc}") from exc
        return target

    def backup_all(self) -> BackupSweep:
        sweep = BackupSweep()
        data_directory = Path(self.config.get().data_directory)
        try:
            names = sorted(
                entry.name
                for entry in data_directory.iterdir()
                if entry.is_file() and entry.name.endswith(COLLECTION_SUFFIX)
            )
        except FileNotFoundError:
            return sweep
        except OSError as exc:
            sweep.failed[str(data_directory)] = str(exc)
            warnings.warn(f"jsonvault: backup sweep failed: {exc}", stacklevel=2)
            return sweep

        for name in names:
            try:
                sweep.backed_up.append(self.backup_file(name))
            except DatabaseError as exc:
                sweep.failed[name] = exc.message
                warnings.warn(f"jsonvault: failed to back up {name}: {exc.message}", stacklevel=2)
        return sweep

    def list_backups(self, name: str) -> list[str]:
        prefix = f"{Path(name).stem}_"
        directory = Path(self.config.get().backup_directory)
        try:
            entries = [entry.name for entry in directory.iterdir()]
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise DatabaseError(f"Failed to list backups in {directory}: {exc}") from exc
        return sorted(
            entry
            for entry in entries
            if entry.startswith(prefix) and entry.endswith(COLLECTION_SUFFIX)
        )

    def restore_from_backup(self, backup_path: str | Path, target_name: str) -> Path:
        """Overwrite collection ``target_name`` with a snapshot.

        A relative ``backup_path`` that does not exist as given is looked up in
        the backup directory. The snapshot must hold a JSON array.
        """
        config = self.config.get()
        snapshot = Path(backup_path)
        if not snapshot.is_absolute() and not snapshot.exists():
            snapshot = Path(config.backup_directory) / snapshot
        if not snapshot.is_file():
            raise CollectionNotFoundError(snapshot)

        target = resolve_collection_path(config.data_directory, target_name)
        try:
            payload = snapshot.read_bytes()
            target.parent.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
        except OSError as exc:
            raise DatabaseError(f"Failed to read backup {snapshot}: {exc}") from exc
        loads_records(payload, snapshot)

        with write_lock(target, config.lock_timeout):
            try:
                shutil.copyfile(snapshot, target)
                os.chmod(target, FILE_MODE)
            except OSError as exc:
                raise DatabaseError(f"Failed to restore from backup {snapshot}: {exc}") from exc
        return target

    def start_auto_backup(self) -> bool:
        """Start periodic sweeps. Returns False if disabled or already running."""
        if not self.config.get().backup_enabled:
            return False
        return self._timer.start()

    def stop_auto_backup(self) -> None:
        self._timer.stop()

    @property
    def auto_backup_running(self) -> bool:
        return self._timer.running

    def _backup_directory(self) -> Path:
        directory = Path(self.config.get().backup_directory)
        try:
            directory.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
        except OSError as exc:
            raise DatabaseError(f"Failed to create backup directory {directory}: {exc}") from exc
        return directory

    def __enter__(self) -> BackupManager:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self.stop_auto_backup()
        return False

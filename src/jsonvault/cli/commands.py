"""Subcommand implementations."""

from __future__ import annotations

import json
import sys
from pathlib import Path

from ..backup import BackupManager
from ..renderers import render_collection, render_names
from ..storage import CollectionStore, sanitize_name


def run_list(store: CollectionStore) -> int:
    print(render_names("Collections", store.list_collections()))
    return 0


def run_show(store: CollectionStore, name: str, *, as_json: bool) -> int:
    records = store.read(name)
    if as_json:
        print(json.dumps(records, ensure_ascii=False, indent=2))
    else:
        print(render_collection(sanitize_name(name), records))
    return 0


def run_delete(store: CollectionStore, name: str) -> int:
    store.delete(name)
    print(f"Deleted {sanitize_name(name)}")
    return 0


def run_backup(backups: BackupManager, name: str | None, *, every: bool) -> int:
    """Snapshot one collection, or all of them with ``every``.

    Returns 1 if any file in a sweep failed.
    """
    if not every and name is not None:
        print(f"Backed up to {backups.backup_file(name)}")
        return 0

    sweep = backups.backup_all()
    for path in sweep.backed_up:
        print(f"Backed up to {path}")
    for failed_name, message in sweep.failed.items():
        print(f"Failed: {failed_name}: {message}", file=sys.stderr)
    return 0 if sweep.ok else 1


def run_backups(store: CollectionStore, name: str) -> int:
    print(render_names(f"Snapshots of {sanitize_name(name)}", store.get_backups(name)))
    return 0


def run_restore(store: CollectionStore, snapshot: Path, target: str) -> int:
    restored = store.restore_from_backup(snapshot, target)
    print(f"Restored {restored} from {snapshot}")
    return 0

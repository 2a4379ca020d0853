"""Command line interface for jsonvault."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ..backup import BackupManager
from ..config import ConfigHolder
from ..exceptions import DatabaseError
from ..storage import CollectionStore
from . import commands


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jsonvault")
    parser.add_argument("--data-dir", default=None, help="Collection directory (default ./data)")
    parser.add_argument("--backup-dir", default=None, help="Snapshot directory (default ./backups)")
    parser.add_argument(
        "--max-file-size", type=int, default=None, help="Maximum collection size in bytes"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List collections")

    show_parser = subparsers.add_parser("show", help="Print a collection")
    show_parser.add_argument("name")
    show_parser.add_argument(
        "--json", action="store_true", help="Emit the raw JSON array instead of a table"
    )

    delete_parser = subparsers.add_parser("delete", help="Delete a collection")
    delete_parser.add_argument("name")

    backup_parser = subparsers.add_parser("backup", help="Snapshot one or all collections")
    target = backup_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("name", nargs="?")
    target.add_argument("--all", action="store_true", help="Snapshot every collection")

    backups_parser = subparsers.add_parser("backups", help="List snapshots of a collection")
    backups_parser.add_argument("name")

    restore_parser = subparsers.add_parser("restore", help="Restore a collection from a snapshot")
    restore_parser.add_argument("snapshot", type=Path)
    restore_parser.add_argument("target")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        store, backups = _build(args)
        if args.command == "list":
            return commands.run_list(store)
        if args.command == "show":
            return commands.run_show(store, args.name, as_json=args.json)
        if args.command == "delete":
            return commands.run_delete(store, args.name)
        if args.command == "backup":
            return commands.run_backup(backups, args.name, every=args.all)
        if args.command == "backups":
            return commands.run_backups(store, args.name)
        if args.command == "restore":
            return commands.run_restore(store, args.snapshot, args.target)
    except DatabaseError as exc:
        print(f"Error ({exc.kind.value}): {exc.message}", file=sys.stderr)
        return 1

    parser.error("Unknown command")
    return 2


def _build(args: argparse.Namespace) -> tuple[CollectionStore, BackupManager]:
    config = ConfigHolder()
    changes: dict[str, object] = {}
    if args.data_dir is not None:
        changes["data_directory"] = args.data_dir
    if args.backup_dir is not None:
        changes["backup_directory"] = args.backup_dir
    if args.max_file_size is not None:
        changes["max_file_size"] = args.max_file_size
    if changes:
        config.update(**changes)
    backups = BackupManager(config)
    return CollectionStore(config, backups=backups), backups


if __name__ == "__main__":
    raise SystemExit(main())

"""Basic usage example with explicitly constructed collaborators."""

from __future__ import annotations

from jsonvault import BackupManager, CollectionStore, ConfigHolder, FileSizeError, create_schema
from jsonvault.renderers import render_collection

USER_SCHEMA = create_schema(
    {
        "name": {"kind": "string", "required": True},
        "age": {"kind": "number", "predicate": lambda age: 0 <= age < 150},
        "tags": {"kind": "array"},
    }
)


def main() -> None:
    config = ConfigHolder()
    config.update(data_directory="artifacts/data", backup_directory="artifacts/backups")

    with BackupManager(config) as backups:
        store = CollectionStore(config, backups=backups)
        backups.start_auto_backup()

        result = store.save(
            "users",
            [{"name": "ada", "age": 36, "tags": ["admin"]}, {"name": "bob", "age": 41}],
            USER_SCHEMA,
        )
        print(f"Saved {result.size} bytes to {result.path} (snapshot: {result.backup_path})")

        config.update(max_file_size=64)
        try:
            store.save("users", [{"name": "x" * 100}], USER_SCHEMA)
        except FileSizeError as exc:
            print(f"Rejected: {exc}")

        print(render_collection("users.json", store.read("users", USER_SCHEMA)))
        print(f"Snapshots: {store.get_backups('users')}")


if __name__ == "__main__":
    main()

from __future__ import annotations

import warnings
from pathlib import Path

from jsonvault import CollectionStore, ConfigHolder, NullHook, SaveResult, StoreHook


class _RecordingHook:
    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []

    def on_saved(self, name: str, result: SaveResult) -> None:
        self.events.append(("saved", name))

    def on_deleted(self, name: str, path: Path) -> None:
        self.events.append(("deleted", name))

    def on_backup_failed(self, name: str, error: Exception) -> None:
        self.events.append(("backup_failed", name))


class _BrokenHook:
    def on_saved(self, name: str, result: SaveResult) -> None:
        raise RuntimeError("hook crashed!")


def test_hooks_receive_store_events(config: ConfigHolder) -> None:
    hook = _RecordingHook()
    store = CollectionStore(config, hooks=[hook])

    store.save("users", [])
    store.delete("users")

    assert hook.events == [("saved", "users.json"), ("deleted", "users.json")]


def test_hook_receives_backup_failure(config: ConfigHolder, tmp_path: Path) -> None:
    from jsonvault import BackupManager

    blocker = tmp_path / "blocker"
    blocker.write_text("")
    config.update(backup_enabled=True, backup_directory=str(blocker))
    hook = _RecordingHook()
    store = CollectionStore(config, backups=BackupManager(config), hooks=[hook])

    with warnings.catch_warnings(record=True):
        warnings.simplefilter("always")
        store.save("users", [])

    assert hook.events == [("backup_failed", "users.json"), ("saved", "users.json")]


def test_broken_hook_does_not_fail_save(config: ConfigHolder) -> None:
    store = CollectionStore(config, hooks=[_BrokenHook()])

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        store.save("users", [{"v": 1}])
        store.delete("users")

    assert any("hook error in on_saved" in str(w.message) for w in caught)
    assert store.list_collections() == []


def test_null_hook_satisfies_protocol() -> None:
    assert isinstance(NullHook(), StoreHook)

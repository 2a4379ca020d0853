"""Event hook protocol for observing store activity."""

from __future__ import annotations

import warnings
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from .models import SaveResult


@runtime_checkable
class StoreHook(Protocol):
    """Protocol for receiving store events.

    Implement any subset of these methods; missing ones are skipped.
    Hook methods must not raise; exceptions are swallowed by the dispatcher.
    """

    def on_saved(self, name: str, result: SaveResult) -> None: ...
    def on_deleted(self, name: str, path: Path) -> None: ...
    def on_backup_failed(self, name: str, error: Exception) -> None: ...


class NullHook:
    """No-op hook. Useful as a reference implementation and in tests."""

    def on_saved(self, name: str, result: SaveResult) -> None:
        pass

    def on_deleted(self, name: str, path: Path) -> None:
        pass

    def on_backup_failed(self, name: str, error: Exception) -> None:
        pass


def dispatch(hooks: list[StoreHook], event: str, *args: object) -> None:
    for hook in hooks:
        handler = getattr(hook, event, None)
        if handler is None:
            continue
        try:
            handler(*args)
        except Exception:
            warnings.warn(f"jsonvault: hook error in {event}", stacklevel=3)

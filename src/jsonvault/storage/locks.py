"""Cross-process write lock for collection files."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout

from ..exceptions import LockError

LOCK_SUFFIX = ".lock"


def lock_path_for(path: Path) -> Path:
    return path.with_name(path.name + LOCK_SUFFIX)


@contextmanager
def write_lock(path: Path, timeout_ms: float) -> Iterator[None]:
    """Hold an exclusive lock on ``path`` for the duration of the block.

    Acquisition failures raise ``LockError`` chained to the cause. Once
    acquired, the lock is released on every exit path.
    """
    lock = FileLock(lock_path_for(path), timeout=timeout_ms / 1000)
    try:
        lock.acquire()
    except Timeout as exc:
        raise LockError(
            f"Timed out after {timeout_ms:g}ms waiting for lock on {path}", path
        ) from exc
    except OSError as exc:
        raise LockError(f"Failed to acquire lock on {path}: {exc}", path) from exc
    try:
        yield
    finally:
        lock.release()

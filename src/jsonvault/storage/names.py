"""Collection name sanitation and path resolution."""

from __future__ import annotations

import re
from pathlib import Path

from ..exceptions import ValidationError

COLLECTION_SUFFIX = ".json"
FILE_MODE = 0o600
DIRECTORY_MODE = 0o700
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def sanitize_name(name: str) -> str:
    """Reduce a caller-supplied name to ``<safe-chars>.json``.

    Traversal segments, separators and every character outside
    ``[A-Za-z0-9_-]`` are dropped, so ``"../../etc/passwd"`` becomes
    ``"etcpasswd.json"``. An empty result raises ``ValidationError``.
    """
    if not isinstance(name, str):
        raise ValidationError("Invalid filename")
    stem = name.strip().replace("\\", "/")
    if stem.endswith(COLLECTION_SUFFIX):
        stem = stem[: -len(COLLECTION_SUFFIX)]
    stem = _UNSAFE_CHARS.sub("", stem.replace("..", ""))
    if not stem:
        raise ValidationError("Invalid filename")
    return stem + COLLECTION_SUFFIX


def resolve_collection_path(data_directory: str | Path, name: str) -> Path:
    """Return the absolute path of collection ``name`` inside ``data_directory``."""
    base = Path(data_directory).resolve()
    target = (base / sanitize_name(name)).resolve()
    if target.parent != base:
        raise ValidationError("Invalid file path")
    return target

"""JSON encoding and decoding of collection files."""

from __future__ import annotations

import json
from pathlib import Path

from ..exceptions import DatabaseError, ValidationError


def dumps_records(records: list[object], *, indent: int | None = 2) -> str:
    """Serialize a record array with stable formatting.

    Raises ``ValidationError`` when ``records`` is not a list or holds values
    JSON cannot represent (including NaN and infinities).
    """
    if not isinstance(records, list):
        raise ValidationError("Data must be an array")
    try:
        return json.dumps(records, indent=indent, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Data is not JSON serializable: {exc}") from exc


def encode_records(records: list[object], *, indent: int | None = 2) -> bytes:
    """Serialize a record array to the UTF-8 bytes written to disk."""
    try:
        return dumps_records(records, indent=indent).encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ValidationError(f"Data is not encodable as UTF-8: {exc}") from exc


def loads_records(payload: str | bytes, path: str | Path) -> list[object]:
    """Parse collection file content.

    Raises ``DatabaseError`` when the content is not UTF-8, malformed, or not
    an array.
    """
    try:
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8")
        parsed = json.loads(payload)
    except UnicodeDecodeError as exc:
        raise DatabaseError(f"Failed to decode {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DatabaseError(f"Failed to parse {path}: {exc}") from exc
    if not isinstance(parsed, list):
        raise DatabaseError(f"Data in {path} is not an array")
    return parsed

"""Declarative record schemas and their validation."""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping, Sequence
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict

from .exceptions import ValidationError


class FieldKind(StrEnum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    ANY = "any"


class FieldSpec(BaseModel):
    """Type, presence and optional predicate for one record field."""

    model_config = ConfigDict(frozen=True)

    kind: FieldKind
    required: bool = False
    predicate: Callable[[Any], bool] | None = None


Schema = Mapping[str, FieldSpec]


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid: bool
    errors: tuple[str, ...] = ()


def create_schema(fields: Mapping[str, FieldSpec | Mapping[str, Any]]) -> dict[str, FieldSpec]:
    """Build a schema from ``FieldSpec`` instances or plain mappings.

    >>> create_schema({"age": {"kind": "number", "required": True}})["age"].kind
    <FieldKind.NUMBER: 'number'>
    """
    schema: dict[str, FieldSpec] = {}
    for name, spec in fields.items():
        schema[name] = spec if isinstance(spec, FieldSpec) else FieldSpec.model_validate(spec)
    return schema


def matches_kind(value: object, kind: FieldKind) -> bool:
    if kind == FieldKind.STRING:
        return isinstance(value, str)
    if kind == FieldKind.NUMBER:
        if isinstance(value, bool) or not isinstance(value, int | float):
            return False
        return not (isinstance(value, float) and math.isnan(value))
    if kind == FieldKind.BOOLEAN:
        return isinstance(value, bool)
    if kind == FieldKind.OBJECT:
        return isinstance(value, Mapping)
    if kind == FieldKind.ARRAY:
        return isinstance(value, list | tuple)
    return kind == FieldKind.ANY


def validate_item(item: object, schema: Schema) -> ValidationResult:
    """Check one record against ``schema``, visiting fields in schema order.

    A missing required field short-circuits the remaining checks for that
    field only. The custom predicate runs only when the type check passed.
    """
    fields = item if isinstance(item, Mapping) else {}
    errors: list[str] = []
    for name, spec in schema.items():
        value = fields.get(name)
        if value is None:
            if spec.required:
                errors.append(f"Field '{name}' is required")
            continue

        if not matches_kind(value, spec.kind):
            errors.append(f"Field '{name}' must be of type '{spec.kind.value}'")
            continue

        if spec.predicate is not None and not _run_predicate(spec.predicate, value):
            errors.append(f"Field '{name}' failed custom validation")

    return ValidationResult(valid=not errors, errors=tuple(errors))


def validate_collection(items: Sequence[object], schema: Schema | None = None) -> ValidationResult:
    if schema is None:
        return ValidationResult(valid=True)

    errors: list[str] = []
    for index, item in enumerate(items):
        result = validate_item(item, schema)
        errors.extend(f"Item {index}: {error}" for error in result.errors)
    return ValidationResult(valid=not errors, errors=tuple(errors))


def ensure_valid(items: Sequence[object], schema: Schema | None) -> None:
    """Raise ``ValidationError`` listing every violation when ``items`` do not conform."""
    result = validate_collection(items, schema)
    if not result.valid:
        raise ValidationError(
            f"Schema validation failed: {', '.join(result.errors)}", result.errors
        )


def filter_valid(items: Sequence[object], schema: Schema) -> list[object]:
    return [item for item in items if validate_item(item, schema).valid]


def _run_predicate(predicate: Callable[[Any], bool], value: object) -> bool:
    try:
        return bool(predicate(value))
    except Exception:
        return False

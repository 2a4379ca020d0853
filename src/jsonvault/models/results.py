"""Structured reports for saves, backup sweeps and advisory validation."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, computed_field

from ..schema import ValidationResult


class SaveResult(BaseModel):
    """Outcome of a successful save.

    A failed snapshot does not fail the save; its message is kept in
    ``backup_error`` instead.
    """

    model_config = ConfigDict(frozen=True)

    path: Path
    size: int
    backup_path: Path | None = None
    backup_error: str | None = None


class BackupSweep(BaseModel):
    """Snapshots taken by one pass over the data directory."""

    backed_up: list[Path] = Field(default_factory=list)
    failed: dict[str, str] = Field(default_factory=dict)

    @computed_field(return_type=bool)
    @property
    def ok(self) -> bool:
        return not self.failed


class CollectionReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    records: list[object]
    validation: ValidationResult

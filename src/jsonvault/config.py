"""Store configuration and the holder that swaps it atomically."""

from __future__ import annotations

import threading

import pydantic
from pydantic import BaseModel, ConfigDict, Field
from pydantic_core import ErrorDetails

from .exceptions import ValidationError

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
DEFAULT_LOCK_TIMEOUT_MS = 5000
DEFAULT_BACKUP_INTERVAL_MS = 24 * 60 * 60 * 1000


class StoreConfig(BaseModel):
    """Validated store settings. Timeouts and intervals are in milliseconds."""

    model_config = ConfigDict(strict=True, extra="forbid", frozen=True)

    data_directory: str = Field(default="./data", min_length=1)
    backup_directory: str = Field(default="./backups", min_length=1)
    max_file_size: int = Field(default=DEFAULT_MAX_FILE_SIZE, gt=0)
    lock_timeout: float = Field(default=DEFAULT_LOCK_TIMEOUT_MS, gt=0)
    backup_enabled: bool = True
    backup_interval: float = Field(default=DEFAULT_BACKUP_INTERVAL_MS, gt=0)


class ConfigHolder:
    """Owns the current ``StoreConfig``. Passed to stores and backup managers via DI.

    ``update`` merges the given fields onto the current configuration and
    validates the whole result; either all of it is installed or none of it.
    """

    def __init__(self, config: StoreConfig | None = None) -> None:
        self._config = config or StoreConfig()
        self._lock = threading.Lock()

    def get(self) -> StoreConfig:
        return self._config

    def update(self, **changes: object) -> StoreConfig:
        with self._lock:
            merged = {**self._config.model_dump(), **changes}
            try:
                config = StoreConfig.model_validate(merged)
            except pydantic.ValidationError as exc:
                errors = [_format_error(error) for error in exc.errors()]
                raise ValidationError(
                    f"Invalid configuration: {'; '.join(errors)}", errors
                ) from exc
            self._config = config
            return config


def _format_error(error: ErrorDetails) -> str:
    location = ".".join(str(part) for part in error["loc"]) or "config"
    return f"{location}: {error['msg']}"


_default_holder: ConfigHolder | None = None
_default_lock = threading.Lock()


def default_config() -> ConfigHolder:
    """Return the process-wide holder, creating it on first use."""
    global _default_holder
    with _default_lock:
        if _default_holder is None:
            _default_holder = ConfigHolder()
        return _default_holder


def _reset_default_config() -> None:
    """Drop the process-wide holder. Used by test fixtures."""
    global _default_holder
    with _default_lock:
        _default_holder = None

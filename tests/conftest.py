from __future__ import annotations

from pathlib import Path

import pytest

from jsonvault.config import ConfigHolder, StoreConfig, _reset_default_config


@pytest.fixture(autouse=True)
def _reset_config() -> None:
    _reset_default_config()


@pytest.fixture
def config(tmp_path: Path) -> ConfigHolder:
    return ConfigHolder(
        StoreConfig(
            data_directory=str(tmp_path / "data"),
            backup_directory=str(tmp_path / "backups"),
            backup_enabled=False,
        )
    )

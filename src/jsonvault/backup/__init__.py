"""Snapshot, restore and periodic backup of collection files."""

from .manager import BackupManager, snapshot_name
from .timer import RecurringTask

__all__ = ["BackupManager", "RecurringTask", "snapshot_name"]

"""Result models returned by store and backup operations."""

from .results import BackupSweep, CollectionReport, SaveResult

__all__ = ["BackupSweep", "CollectionReport", "SaveResult"]

"""Serialization helpers for collection files."""

from .json import dumps_records, encode_records, loads_records

__all__ = ["dumps_records", "encode_records", "loads_records"]

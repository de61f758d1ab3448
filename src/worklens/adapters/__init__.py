"""Adapters - I/O implementations of ports."""

from .json_store import JsonRecordStore, RecordStoreError

__all__ = [
    "JsonRecordStore",
    "RecordStoreError",
]

"""Persistence for imported records."""

from ._json_file import JsonFileRecordStore
from ._models import Page, StoredRecord, new_record_id, validate_record_id
from ._repository import InMemoryRecordStore, RecordStore

__all__ = [
    "InMemoryRecordStore",
    "JsonFileRecordStore",
    "Page",
    "RecordStore",
    "StoredRecord",
    "new_record_id",
    "validate_record_id",
]

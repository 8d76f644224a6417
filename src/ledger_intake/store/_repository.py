"""Record store protocol and in-memory implementation."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any, Protocol, runtime_checkable

from ..errors import RecordNotFoundError
from ._models import StoredRecord

logger = logging.getLogger(__name__)

_NO_DATE = datetime.min.replace(tzinfo=timezone.utc)


@runtime_checkable
class RecordStore(Protocol):
    """Abstraction over where imported records are kept."""

    def insert_many(self, records: Iterable[Mapping[str, Any] | StoredRecord]) -> list[StoredRecord]:
        ...

    def find_page(self, page: int, limit: int) -> list[StoredRecord]:
        ...

    def count(self) -> int:
        ...

    def delete(self, record_id: str) -> None:
        ...

    def all(self) -> list[StoredRecord]:
        ...


def _date_key(record: StoredRecord) -> tuple[bool, datetime]:
    return (record.date is not None, record.date or _NO_DATE)


class InMemoryRecordStore:
    """Dict-backed record store, kept in insertion order.

    >>> store = InMemoryRecordStore()
    >>> [rec] = store.insert_many([{"name": "Acme", "amount": 100}])
    >>> store.count()
    1
    """

    def __init__(self, records: Iterable[StoredRecord] | None = None) -> None:
        self._records: dict[str, StoredRecord] = {r.id: r for r in records or ()}

    def insert_many(self, records: Iterable[Mapping[str, Any] | StoredRecord]) -> list[StoredRecord]:
        # Validate the whole batch before touching the store.
        batch = [
            r if isinstance(r, StoredRecord) else StoredRecord.model_validate(dict(r))
            for r in records
        ]
        for record in batch:
            self._records[record.id] = record
        self._changed()
        logger.info("Inserted %d records", len(batch))
        return batch

    def find_page(self, page: int, limit: int) -> list[StoredRecord]:
        if page < 1 or limit < 1:
            raise ValueError("page and limit must be >= 1")
        ordered = sorted(self._records.values(), key=_date_key, reverse=True)
        start = (page - 1) * limit
        return ordered[start : start + limit]

    def count(self) -> int:
        return len(self._records)

    def delete(self, record_id: str) -> None:
        if record_id not in self._records:
            raise RecordNotFoundError(record_id)
        del self._records[record_id]
        self._changed()
        logger.info("Deleted record %s", record_id)

    def all(self) -> list[StoredRecord]:
        return list(self._records.values())

    def _changed(self) -> None:
        """Hook for subclasses that persist after each mutation."""

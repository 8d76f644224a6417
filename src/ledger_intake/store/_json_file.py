"""Record store persisted to a single JSON file."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import TypeAdapter

from ._models import StoredRecord
from ._repository import InMemoryRecordStore

logger = logging.getLogger(__name__)

_RECORDS = TypeAdapter(list[StoredRecord])


class JsonFileRecordStore(InMemoryRecordStore):
    """Keeps all records in memory and rewrites *path* after every change.

    Only safe for a single process.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        records: list[StoredRecord] = []
        if self.path.exists() and self.path.stat().st_size:
            records = _RECORDS.validate_json(self.path.read_bytes())
            logger.debug("Loaded %d records from %s", len(records), self.path)
        super().__init__(records)

    def _changed(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_bytes(_RECORDS.dump_json(self.all(), indent=2))
        tmp.replace(self.path)

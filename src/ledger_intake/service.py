"""Upload, import, listing, deletion and export of ledger records."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any, BinaryIO, TextIO

from .config import IntakeSettings
from .errors import NothingToImportError
from .store import InMemoryRecordStore, JsonFileRecordStore, Page, RecordStore, validate_record_id
from .workbook import SchemaRegistry, UploadResult, build_registry, check_upload, process_workbook
from .workbook.export import write_csv, write_xlsx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportSummary:
    message: str
    inserted_ids: list[str]
    skipped: int

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "insertedIds": self.inserted_ids, "skipped": self.skipped}


class IntakeService:
    """Entry point used by the CLI (or any other transport).

    Args:
        store: Where imported records live (in-memory unless configured)
        settings: Upload limits, date policy and paging defaults
        registry: Sheet schemas; built from ``settings.date_policy`` if omitted
    """

    def __init__(
        self,
        store: RecordStore | None = None,
        settings: IntakeSettings | None = None,
        registry: SchemaRegistry | None = None,
    ) -> None:
        self.settings = settings or IntakeSettings()
        self.store = store if store is not None else InMemoryRecordStore()
        self.registry = registry or build_registry(self.settings.date_policy)

    @classmethod
    def from_settings(cls, settings: IntakeSettings) -> "IntakeService":
        """Build a service whose store follows ``settings.store_path``."""
        store: RecordStore
        if settings.store_path:
            store = JsonFileRecordStore(settings.store_path)
        else:
            store = InMemoryRecordStore()
        return cls(store=store, settings=settings)

    def upload(self, data: bytes, filename: str, *, today: date | None = None) -> UploadResult:
        """Check the file, then validate every sheet of the workbook."""
        check_upload(
            filename,
            len(data),
            max_bytes=self.settings.max_upload_bytes,
            allowed_extensions=self.settings.allowed_extensions,
        )
        logger.info("Processing upload %s (%d bytes)", filename, len(data))
        return process_workbook(data, registry=self.registry, today=today)

    def import_records(self, valid_data: Sequence[Mapping[str, Any]]) -> ImportSummary:
        """Persist the ``validData`` of an upload result.

        Raises:
            NothingToImportError: If *valid_data* is empty
        """
        if not valid_data:
            raise NothingToImportError()
        inserted = self.store.insert_many(valid_data)
        return ImportSummary(
            message=f"Successfully imported {len(inserted)} rows",
            inserted_ids=[record.id for record in inserted],
            skipped=len(valid_data) - len(inserted),
        )

    def list_records(self, page: int = 1, limit: int | None = None) -> Page:
        limit = self.settings.page_size if limit is None else limit
        if page < 1 or limit < 1:
            raise ValueError("page and limit must be >= 1")
        return Page(
            data=self.store.find_page(page, limit),
            current_page=page,
            total_pages=math.ceil(self.store.count() / limit),
        )

    def delete_record(self, record_id: str) -> None:
        self.store.delete(validate_record_id(record_id))

    def export_xlsx(self, fp: BinaryIO) -> int:
        return write_xlsx(self.store.all(), fp)

    def export_csv(self, fp: TextIO) -> int:
        return write_csv(self.store.all(), fp)

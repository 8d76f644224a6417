"""Document model for persisted records."""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..errors import InvalidRecordIdError

_RECORD_ID = re.compile(r"^[0-9a-f]{32}$")


def new_record_id() -> str:
    return uuid.uuid4().hex


def validate_record_id(record_id: str) -> str:
    """Return *record_id* unchanged, or raise ``InvalidRecordIdError``."""
    if not isinstance(record_id, str) or not _RECORD_ID.match(record_id):
        raise InvalidRecordIdError(str(record_id))
    return record_id


class StoredRecord(BaseModel):
    """A persisted record.

    Fields cover both shipped sheet schemas; anything else present in the
    imported payload is kept as an extra field.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(default_factory=new_record_id)
    sheetName: str | None = None
    name: str | None = None
    amount: float | None = None
    date: datetime | None = None
    verified: str | None = None
    invoiceDate: datetime | None = None
    status: str | None = None

    @field_validator("date", "invoiceDate")
    @classmethod
    def _as_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


@dataclass(frozen=True)
class Page:
    """One page of records, newest ``date`` first."""

    data: list[StoredRecord]
    current_page: int
    total_pages: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": [record.to_dict() for record in self.data],
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
        }

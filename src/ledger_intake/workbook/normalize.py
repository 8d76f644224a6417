"""Conversion of raw spreadsheet cells into canonical domain values."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
from typing import Any

from .schema import ColumnKind, ColumnSchema

# Days between the spreadsheet epoch (serial 0 = 1899-12-30) and 1970-01-01.
UNIX_EPOCH_SERIAL = 25569
UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

FLAG_TRUE = "Yes"
FLAG_FALSE = "No"


class CellType(str, Enum):
    """Type of a parsed cell value, as reported by the workbook reader."""

    empty = "empty"
    string = "string"
    number = "number"
    boolean = "boolean"
    date = "date"


@dataclass(frozen=True)
class RawCell:
    value: Any
    cell_type: CellType

    @classmethod
    def from_value(cls, value: Any) -> "RawCell":
        """Build a cell from a value produced by ``openpyxl``."""
        return cls(value=value, cell_type=cell_type_of(value))


@dataclass(frozen=True)
class NormalizedCell:
    """Normalized value of one cell, or the error that prevented it."""

    value: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def cell_type_of(value: Any) -> CellType:
    if value is None:
        return CellType.empty
    # bool is a subclass of int, so it has to be checked first.
    if isinstance(value, bool):
        return CellType.boolean
    if isinstance(value, (int, float)):
        return CellType.number
    if isinstance(value, (date, datetime)):
        return CellType.date
    return CellType.string


def _utc_midnight(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        value = value.date()
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def serial_to_datetime(serial: float) -> datetime:
    """Decode a spreadsheet date serial to UTC midnight of that day.

    >>> serial_to_datetime(45000)
    datetime.datetime(2023, 3, 15, 0, 0, tzinfo=datetime.timezone.utc)
    """
    if not math.isfinite(serial):
        raise ValueError(f"Date serial must be finite, got {serial!r}")
    return UNIX_EPOCH + timedelta(days=math.floor(serial - UNIX_EPOCH_SERIAL))


def parse_date_string(text: str) -> datetime:
    """Parse an ISO-like date or date-time string into UTC midnight.

    ``"2024-05-01 13:45"`` is accepted as ``"2024-05-01T13:45"``. Naive
    values are read as UTC.
    """
    text = text.strip()
    if not text:
        raise ValueError("empty date string")
    if " " in text and "T" not in text:
        text = text.replace(" ", "T", 1)
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return _utc_midnight(parsed)


def _normalize_date(column: ColumnSchema, cell: RawCell) -> NormalizedCell:
    try:
        if cell.cell_type == CellType.number:
            return NormalizedCell(value=serial_to_datetime(cell.value))
        if cell.cell_type == CellType.date:
            return NormalizedCell(value=_utc_midnight(cell.value))
        if cell.cell_type == CellType.string:
            text = str(cell.value)
            if not text.strip():
                # left for the required check
                return NormalizedCell(value=cell.value)
            return NormalizedCell(value=parse_date_string(text))
    except (ValueError, OverflowError):
        return NormalizedCell(error=f"Invalid {column.header} value")
    return NormalizedCell(value=cell.value)


def _parse_number(text: str) -> int | float | None:
    """Parse numeric text such as ``"100"`` or ``" 12.5 "``; ``None`` if it is not a finite number."""
    text = text.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def normalize_cell(column: ColumnSchema, cell: RawCell) -> NormalizedCell:
    """Convert *cell* according to the kind of *column*.

    Values that need no conversion are returned unchanged, so normalizing an
    already canonical value is a no-op. Conversion failures are reported on
    the result rather than raised.
    """
    if column.kind == ColumnKind.date_like:
        return _normalize_date(column, cell)
    if column.kind == ColumnKind.boolean_flag and cell.cell_type == CellType.boolean:
        return NormalizedCell(value=FLAG_TRUE if cell.value else FLAG_FALSE)
    if column.kind == ColumnKind.plain_number and cell.cell_type == CellType.string:
        number = _parse_number(str(cell.value))
        if number is not None:
            return NormalizedCell(value=number)
    return NormalizedCell(value=cell.value)

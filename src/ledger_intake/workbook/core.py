"""Core workbook ingestion types and functions.

A workbook upload is processed in three layers, each returning a value
instead of writing to shared state:

- :func:`validate_row` turns one row into a record or a list of errors
- :func:`process_sheet` partitions a sheet's rows into a :class:`SheetReport`
- :func:`process_workbook` folds every sheet report into an :class:`UploadResult`
"""

from __future__ import annotations

import io
import logging
import zipfile
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date
from pathlib import PurePath
from typing import Any

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from pydantic import TypeAdapter

from ..errors import MalformedWorkbookError, UnsupportedFileTypeError, UploadTooLargeError
from .normalize import RawCell
from .schema import SchemaRegistry, resolve_schema
from .validator import validate_row

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 2 * 1024 * 1024
ALLOWED_EXTENSIONS = (".xlsx",)

MESSAGE_ALL_VALID = "All data validated successfully"
MESSAGE_WITH_ERRORS = "Validation completed with errors"

_JSON = TypeAdapter(dict[str, Any])

# ParseError (and lxml's XMLSyntaxError) subclass SyntaxError.
_READ_ERRORS = (InvalidFileException, zipfile.BadZipFile, KeyError, ValueError, OSError, EOFError, SyntaxError)


@dataclass(frozen=True)
class RowError:
    """Validation errors for one data row (1-based sheet row number)."""

    row: int
    errors: list[str]


@dataclass
class SheetReport:
    """Outcome of processing one sheet."""

    sheet_name: str
    valid_records: list[dict[str, Any]] = field(default_factory=list)
    row_errors: list[RowError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.row_errors)


@dataclass(frozen=True)
class SheetErrors:
    sheet: str
    errors: list[RowError]


@dataclass(frozen=True)
class UploadResult:
    """Aggregated result of validating an uploaded workbook.

    Attributes:
        valid_data: Normalized records of every valid row, tagged with ``sheetName``
        errors: One entry per sheet that had at least one invalid row
        message: Human readable summary
    """

    valid_data: list[dict[str, Any]]
    errors: list[SheetErrors]
    message: str

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready payload (dates as ISO-8601 strings)."""
        payload = {
            "validData": self.valid_data,
            "errors": [
                {
                    "sheet": entry.sheet,
                    "errors": [{"row": e.row, "errors": e.errors} for e in entry.errors],
                }
                for entry in self.errors
            ],
            "message": self.message,
        }
        return _JSON.dump_python(payload, mode="json")


# ---------------------------------------------------------------------------
# Upload guard
# ---------------------------------------------------------------------------


def check_upload(
    filename: str,
    size: int,
    *,
    max_bytes: int = MAX_UPLOAD_BYTES,
    allowed_extensions: Sequence[str] = ALLOWED_EXTENSIONS,
) -> None:
    """Reject uploads with the wrong extension or above the size limit.

    Raises:
        UnsupportedFileTypeError: If the extension is not allowed
        UploadTooLargeError: If *size* exceeds *max_bytes*
    """
    suffix = PurePath(filename).suffix.lower()
    allowed = [ext.lower() for ext in allowed_extensions]
    if suffix not in allowed:
        raise UnsupportedFileTypeError(filename, allowed)
    if size > max_bytes:
        raise UploadTooLargeError(size, max_bytes)


# ---------------------------------------------------------------------------
# Sheet processing
# ---------------------------------------------------------------------------


def _header_map(header_values: Sequence[Any]) -> dict[int, str]:
    """Map column index -> trimmed header text, first occurrence winning."""
    headers: dict[int, str] = {}
    seen: set[str] = set()
    for index, value in enumerate(header_values):
        if value is None:
            continue
        header = str(value).strip()
        if not header:
            continue
        if header in seen:
            logger.warning("Duplicate header %r in column %d ignored", header, index + 1)
            continue
        seen.add(header)
        headers[index] = header
    return headers


def process_sheet(
    sheet_name: str,
    rows: Iterable[Sequence[Any]],
    *,
    registry: SchemaRegistry | None = None,
    today: date | None = None,
) -> SheetReport:
    """Validate every data row of one sheet.

    Args:
        sheet_name: Sheet name, used to resolve the schema and to tag records
        rows: Cell values per sheet row, starting with the header row
        registry: Schema registry (defaults to the built-in one)
        today: Reference date for month-bound date constraints

    Returns:
        SheetReport partitioning the data rows into records and row errors
    """
    schema = resolve_schema(sheet_name, registry)
    report = SheetReport(sheet_name=sheet_name)
    row_iter = iter(rows)

    header_values = next(row_iter, None)
    if header_values is None:
        return report
    headers = _header_map(header_values)

    for row_number, values in enumerate(row_iter, start=2):
        if all(v is None or v == "" for v in values):
            continue

        cells = {
            header: RawCell.from_value(values[index])
            for index, header in headers.items()
            if index < len(values)
        }
        outcome = validate_row(schema, cells, today=today)
        if outcome.is_valid:
            report.valid_records.append({"sheetName": sheet_name, **outcome.record})
        else:
            report.row_errors.append(RowError(row=row_number, errors=outcome.errors))

    logger.debug(
        "Processed sheet %r with schema %r: %d valid, %d invalid",
        sheet_name,
        schema.name,
        len(report.valid_records),
        len(report.row_errors),
    )
    return report


# ---------------------------------------------------------------------------
# Workbook pipeline
# ---------------------------------------------------------------------------


def process_workbook(
    data: bytes,
    *,
    registry: SchemaRegistry | None = None,
    today: date | None = None,
) -> UploadResult:
    """Parse an ``.xlsx`` buffer and validate every sheet in workbook order.

    Raises:
        MalformedWorkbookError: If *data* is not a readable workbook
    """
    try:
        wb = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except _READ_ERRORS as exc:
        logger.warning("Rejected upload that is not a readable workbook: %s", exc)
        raise MalformedWorkbookError(f"Cannot read workbook: {exc}") from exc

    # Read-only sheets are parsed lazily, while their rows are iterated.
    try:
        reports = [
            process_sheet(ws.title, ws.iter_rows(values_only=True), registry=registry, today=today)
            for ws in wb.worksheets
        ]
    except _READ_ERRORS as exc:
        logger.warning("Rejected upload with an unreadable sheet: %s", exc)
        raise MalformedWorkbookError(f"Cannot read workbook: {exc}") from exc
    finally:
        wb.close()

    valid_data = [record for report in reports for record in report.valid_records]
    errors = [
        SheetErrors(sheet=report.sheet_name, errors=report.row_errors)
        for report in reports
        if report.has_errors
    ]
    message = MESSAGE_WITH_ERRORS if errors else MESSAGE_ALL_VALID

    logger.info(
        "Validated workbook: %d sheets, %d valid rows, %d sheets with errors",
        len(reports),
        len(valid_data),
        len(errors),
    )
    return UploadResult(valid_data=valid_data, errors=errors, message=message)

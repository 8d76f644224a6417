"""Workbook ingestion for ledger-intake.

Parses ``.xlsx`` uploads, validates each sheet against its schema and
exports stored records back to tabular files.
"""

from __future__ import annotations

from .core import (
    RowError,
    SheetErrors,
    SheetReport,
    UploadResult,
    check_upload,
    process_sheet,
    process_workbook,
)
from .export import write_csv, write_xlsx
from .normalize import CellType, NormalizedCell, RawCell, normalize_cell, serial_to_datetime
from .schema import (
    ColumnKind,
    ColumnSchema,
    Constraint,
    ConstraintKind,
    DEFAULT_REGISTRY,
    SchemaRegistry,
    SheetSchema,
    build_registry,
    check_constraint,
    resolve_schema,
)
from .validator import ValidationOutcome, validate_row

__all__ = [
    "CellType",
    "ColumnKind",
    "ColumnSchema",
    "Constraint",
    "ConstraintKind",
    "DEFAULT_REGISTRY",
    "NormalizedCell",
    "RawCell",
    "RowError",
    "SchemaRegistry",
    "SheetErrors",
    "SheetReport",
    "SheetSchema",
    "UploadResult",
    "ValidationOutcome",
    "build_registry",
    "check_constraint",
    "check_upload",
    "normalize_cell",
    "process_sheet",
    "process_workbook",
    "resolve_schema",
    "serial_to_datetime",
    "validate_row",
    "write_csv",
    "write_xlsx",
]

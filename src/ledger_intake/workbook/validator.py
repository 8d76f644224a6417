"""Row-level validation against a sheet schema."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Optional

from .normalize import CellType, RawCell, normalize_cell
from .schema import SheetSchema, check_constraint

_MISSING = RawCell(value=None, cell_type=CellType.empty)


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating a single row.

    Attributes:
        record: Target field -> normalized value (None if the row is invalid)
        errors: One message per failing column, in schema column order
    """

    record: Optional[dict[str, Any]]
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.record is not None and not self.errors


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def validate_row(
    schema: SheetSchema,
    cells: Mapping[str, RawCell],
    *,
    today: date | None = None,
) -> ValidationOutcome:
    """Validate one row given as header -> raw cell.

    Every schema column is checked and all failures are reported together.
    A schema column absent from *cells* counts as an empty cell; cells whose
    header is not part of the schema are ignored.
    """
    record: dict[str, Any] = {}
    errors: list[str] = []

    for column in schema.columns:
        normalized = normalize_cell(column, cells.get(column.header, _MISSING))
        if not normalized.ok:
            errors.append(normalized.error)
            continue

        value = normalized.value
        if _is_empty(value):
            if column.required:
                errors.append(f"{column.header} is required")
                continue
        elif column.constraint is not None and not check_constraint(
            column.constraint, value, today=today
        ):
            errors.append(f"Invalid {column.header} value")
            continue

        record[column.target_field] = value

    if errors:
        return ValidationOutcome(record=None, errors=errors)
    return ValidationOutcome(record=record)

"""Per-sheet column schemas and the registry that resolves them.

Schemas are plain data: each column carries a kind tag (how raw cells are
normalized) and an optional named constraint (how normalized values are
checked). Constraints are evaluated by :func:`check_constraint`, so a schema
can be dumped to JSON and inspected without executing anything.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, model_validator

DEFAULT_SHEET = "Default"

DatePolicy = Literal["any", "current_month"]


class ColumnKind(str, Enum):
    """How a raw cell value is converted before validation."""

    date_like = "date_like"
    boolean_flag = "boolean_flag"
    plain_text = "plain_text"
    plain_number = "plain_number"


class ConstraintKind(str, Enum):
    """Named value constraints understood by :func:`check_constraint`."""

    positive_number = "positive_number"
    calendar_date = "calendar_date"
    date_in_current_month = "date_in_current_month"
    one_of = "one_of"


class Constraint(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ConstraintKind
    choices: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _check_choices(self) -> "Constraint":
        if self.kind == ConstraintKind.one_of and not self.choices:
            raise ValueError("one_of constraint requires at least one choice")
        return self

    @classmethod
    def one_of(cls, *choices: str) -> "Constraint":
        return cls(kind=ConstraintKind.one_of, choices=choices)


POSITIVE_NUMBER = Constraint(kind=ConstraintKind.positive_number)
CALENDAR_DATE = Constraint(kind=ConstraintKind.calendar_date)
DATE_IN_CURRENT_MONTH = Constraint(kind=ConstraintKind.date_in_current_month)


class ColumnSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    header: str
    target_field: str
    kind: ColumnKind = ColumnKind.plain_text
    required: bool = False
    constraint: Constraint | None = None


class SheetSchema(BaseModel):
    """Expected columns of one sheet, looked up by exact header text."""

    model_config = ConfigDict(frozen=True)

    name: str
    columns: tuple[ColumnSchema, ...]

    @model_validator(mode="after")
    def _check_unique(self) -> "SheetSchema":
        headers = [c.header for c in self.columns]
        targets = [c.target_field for c in self.columns]
        if len(set(headers)) != len(headers):
            raise ValueError(f"Duplicate header in schema '{self.name}'")
        if len(set(targets)) != len(targets):
            raise ValueError(f"Duplicate target field in schema '{self.name}'")
        return self

    def column(self, header: str) -> ColumnSchema | None:
        for col in self.columns:
            if col.header == header:
                return col
        return None


class SchemaRegistry(BaseModel):
    """Read-only lookup table from sheet name to schema."""

    model_config = ConfigDict(frozen=True)

    schemas: Mapping[str, SheetSchema]
    default: str = DEFAULT_SHEET

    @model_validator(mode="after")
    def _check_default(self) -> "SchemaRegistry":
        if self.default not in self.schemas:
            raise ValueError(f"Default schema '{self.default}' is not registered")
        return self

    def resolve(self, sheet_name: str) -> SheetSchema:
        schema = self.schemas.get(sheet_name)
        if schema is None:
            return self.schemas[self.default]
        return schema


# ---------------------------------------------------------------------------
# Constraint dispatch
# ---------------------------------------------------------------------------


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def check_constraint(constraint: Constraint, value: Any, *, today: date | None = None) -> bool:
    """Return whether *value* satisfies *constraint*.

    ``today`` is only consulted by ``date_in_current_month``; it defaults to
    the current UTC date.
    """
    kind = constraint.kind
    if kind == ConstraintKind.positive_number:
        return _is_number(value) and math.isfinite(value) and value > 0
    if kind == ConstraintKind.calendar_date:
        return isinstance(value, datetime)
    if kind == ConstraintKind.date_in_current_month:
        if not isinstance(value, datetime):
            return False
        if today is None:
            today = datetime.now(timezone.utc).date()
        return value.year == today.year and value.month == today.month
    if kind == ConstraintKind.one_of:
        return isinstance(value, str) and value in constraint.choices
    raise ValueError(f"Unknown constraint kind: {kind!r}")


# ---------------------------------------------------------------------------
# Shipped schemas
# ---------------------------------------------------------------------------


def _default_schema(date_policy: DatePolicy) -> SheetSchema:
    date_constraint = DATE_IN_CURRENT_MONTH if date_policy == "current_month" else CALENDAR_DATE
    return SheetSchema(
        name=DEFAULT_SHEET,
        columns=(
            ColumnSchema(header="Name", target_field="name", required=True),
            ColumnSchema(
                header="Amount",
                target_field="amount",
                kind=ColumnKind.plain_number,
                required=True,
                constraint=POSITIVE_NUMBER,
            ),
            ColumnSchema(
                header="Date",
                target_field="date",
                kind=ColumnKind.date_like,
                required=True,
                constraint=date_constraint,
            ),
            ColumnSchema(
                header="Verified",
                target_field="verified",
                kind=ColumnKind.boolean_flag,
                required=True,
                constraint=Constraint.one_of("Yes", "No"),
            ),
        ),
    )


INVOICES_SCHEMA = SheetSchema(
    name="Invoices",
    columns=(
        ColumnSchema(header="Name", target_field="name", required=True),
        ColumnSchema(
            header="InvoiceDate",
            target_field="invoiceDate",
            kind=ColumnKind.date_like,
            required=True,
            constraint=CALENDAR_DATE,
        ),
        ColumnSchema(
            header="Amount",
            target_field="amount",
            kind=ColumnKind.plain_number,
            required=True,
            constraint=POSITIVE_NUMBER,
        ),
        ColumnSchema(
            header="Status",
            target_field="status",
            required=True,
            constraint=Constraint.one_of("Paid", "Pending"),
        ),
    ),
)


def build_registry(date_policy: DatePolicy = "any") -> SchemaRegistry:
    """Build the registry holding the ``Default`` and ``Invoices`` schemas.

    Args:
        date_policy: ``"any"`` accepts every resolved date in the Default
            sheet's ``Date`` column; ``"current_month"`` only accepts dates
            in the current calendar month.
    """
    if date_policy not in ("any", "current_month"):
        raise ValueError(f"Unknown date policy: {date_policy!r}")
    default = _default_schema(date_policy)
    return SchemaRegistry(schemas={default.name: default, INVOICES_SCHEMA.name: INVOICES_SCHEMA})


DEFAULT_REGISTRY = build_registry()


def resolve_schema(sheet_name: str, registry: SchemaRegistry | None = None) -> SheetSchema:
    """Return the schema for *sheet_name*, falling back to the default schema."""
    return (registry or DEFAULT_REGISTRY).resolve(sheet_name)

"""Settings for the ingestion pipeline, store and CLI."""

from __future__ import annotations

from pydantic import Field, field_validator

from ..workbook.schema import DatePolicy
from ._app_config import AppConfig

MAX_UPLOAD_BYTES = 2 * 1024 * 1024


class IntakeSettings(AppConfig):
    """Top-level settings, read from ``LEDGER_INTAKE_*`` env vars or the
    ``intake`` object of the config file."""

    class Meta:
        key = "intake"
        env_prefix = "LEDGER_INTAKE"

    max_upload_bytes: int = Field(default=MAX_UPLOAD_BYTES, gt=0)
    allowed_extensions: tuple[str, ...] = (".xlsx",)
    date_policy: DatePolicy = "any"
    page_size: int = Field(default=20, ge=1)
    store_path: str | None = None

    @field_validator("allowed_extensions", mode="before")
    @classmethod
    def _split_extensions(cls, value):
        if isinstance(value, str):
            value = [part.strip() for part in value.split(",") if part.strip()]
        return tuple(ext if ext.startswith(".") else f".{ext}" for ext in value)

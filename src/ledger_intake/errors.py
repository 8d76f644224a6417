"""Exception hierarchy for ledger-intake.

Only failures that abort an operation are raised. Per-cell and per-row
validation problems are collected as strings on the upload result instead.
"""

from __future__ import annotations


class IntakeError(Exception):
    """Base exception for ledger-intake errors."""


# ---------------------------------------------------------------------------
# Upload / workbook
# ---------------------------------------------------------------------------


class MalformedWorkbookError(IntakeError):
    """Raised when the uploaded bytes cannot be parsed as a workbook."""


class UploadRejectedError(IntakeError):
    """Raised when an upload fails a file-level check."""


class UnsupportedFileTypeError(UploadRejectedError):
    def __init__(self, filename: str, allowed: list[str]) -> None:
        self.filename = filename
        self.allowed = allowed
        super().__init__(f"Only {', '.join(allowed)} files allowed, got '{filename}'.")


class UploadTooLargeError(UploadRejectedError):
    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"File is {size} bytes; maximum upload size is {limit} bytes.")


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class StoreError(IntakeError):
    """Base exception for record store failures."""


class RecordNotFoundError(StoreError):
    def __init__(self, record_id: str) -> None:
        self.record_id = record_id
        super().__init__(f"Record '{record_id}' not found.")


class InvalidRecordIdError(StoreError):
    def __init__(self, record_id: str) -> None:
        self.record_id = record_id
        super().__init__(f"Record id '{record_id}' is not in the correct format.")


class NothingToImportError(StoreError):
    def __init__(self) -> None:
        super().__init__("No valid data to import.")

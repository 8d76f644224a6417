from ._version import __version__
from .errors import IntakeError, MalformedWorkbookError
from .service import IntakeService
from .workbook import UploadResult, process_workbook

__all__ = [
    "__version__",
    "IntakeError",
    "IntakeService",
    "MalformedWorkbookError",
    "UploadResult",
    "process_workbook",
]

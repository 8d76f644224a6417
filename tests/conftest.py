import io
from datetime import date, datetime, timezone

import pytest
from openpyxl import Workbook


def build_workbook(sheets: dict[str, list[list]]) -> bytes:
    """Serialize ``{sheet name: rows}`` to ``.xlsx`` bytes, keeping sheet order."""
    wb = Workbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(name)
        for row in rows:
            ws.append(row)
    fp = io.BytesIO()
    wb.save(fp)
    return fp.getvalue()


def today_serial() -> int:
    return (datetime.now(timezone.utc).date() - date(1899, 12, 30)).days


@pytest.fixture
def make_workbook():
    return build_workbook


@pytest.fixture
def serial_today():
    """Spreadsheet date serial of the current UTC day."""
    return today_serial()

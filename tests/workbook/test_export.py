"""Tests for exporting stored records."""

import csv
import io
from datetime import datetime, timezone

import pytest
from openpyxl import load_workbook

from ledger_intake.store import StoredRecord
from ledger_intake.workbook.export import (
    EXPORT_HEADERS,
    format_amount,
    format_date,
    write_csv,
    write_xlsx,
)


@pytest.fixture
def records():
    return [
        StoredRecord(
            sheetName="Default",
            name="Acme",
            amount=1234567.5,
            date=datetime(2023, 3, 5, tzinfo=timezone.utc),
            verified="Yes",
        ),
        StoredRecord(
            sheetName="Invoices",
            name="Globex",
            amount=99,
            invoiceDate=datetime(2024, 12, 31, tzinfo=timezone.utc),
            status="Paid",
        ),
    ]


class TestFormatting:
    @pytest.mark.parametrize(
        "amount,expected",
        [
            (0, "0.00"),
            (5, "5.00"),
            (999.999, "1,000.00"),
            (1234.5, "1,234.50"),
            (123456, "1,23,456.00"),
            (1234567.5, "12,34,567.50"),
            (-98765432.1, "-9,87,65,432.10"),
            (None, ""),
        ],
    )
    def test_amount(self, amount, expected):
        assert format_amount(amount) == expected

    def test_date(self):
        assert format_date(datetime(2023, 3, 5, tzinfo=timezone.utc)) == "05-03-2023"
        assert format_date(None) == ""


class TestWriters:
    def test_xlsx(self, records):
        fp = io.BytesIO()
        assert write_xlsx(records, fp) == 2

        fp.seek(0)
        wb = load_workbook(fp)
        ws = wb["Exported Data"]
        rows = list(ws.iter_rows(values_only=True))
        assert list(rows[0]) == EXPORT_HEADERS
        assert list(rows[1]) == ["Acme", "12,34,567.50", "05-03-2023", "Yes"]
        # invoices fall back to the invoice date and have no verified flag
        assert rows[2][:3] == ("Globex", "99.00", "31-12-2024")
        assert rows[2][3] in (None, "")

    def test_csv(self, records):
        fp = io.StringIO()
        assert write_csv(records, fp) == 2
        rows = list(csv.reader(io.StringIO(fp.getvalue())))
        assert rows[0] == EXPORT_HEADERS
        assert rows[1] == ["Acme", "12,34,567.50", "05-03-2023", "Yes"]

    def test_empty_export_has_header_only(self):
        fp = io.StringIO()
        assert write_csv([], fp) == 0
        assert fp.getvalue().strip() == ",".join(EXPORT_HEADERS)

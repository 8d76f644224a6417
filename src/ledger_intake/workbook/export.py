"""Export stored records back to a workbook or CSV."""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable
from datetime import datetime
from typing import BinaryIO, TextIO

from openpyxl import Workbook

from ..store import StoredRecord

logger = logging.getLogger(__name__)

EXPORT_SHEET = "Exported Data"
EXPORT_HEADERS = ["Name", "Amount", "Date", "Verified"]


def format_amount(amount: float | None) -> str:
    """Format with two decimals and Indian digit grouping.

    >>> format_amount(1234567.5)
    '12,34,567.50'
    """
    if amount is None:
        return ""
    sign = "-" if amount < 0 else ""
    whole, _, fraction = f"{abs(amount):.2f}".partition(".")
    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])
    return f"{sign}{whole}.{fraction}"


def format_date(value: datetime | None) -> str:
    if value is None:
        return ""
    return value.strftime("%d-%m-%Y")


def export_row(record: StoredRecord) -> list[str]:
    return [
        record.name or "",
        format_amount(record.amount),
        format_date(record.date or record.invoiceDate),
        record.verified or "",
    ]


def write_xlsx(records: Iterable[StoredRecord], fp: BinaryIO) -> int:
    """Write *records* to an ``.xlsx`` workbook; returns the number of rows."""
    wb = Workbook()
    ws = wb.active
    ws.title = EXPORT_SHEET
    ws.append(EXPORT_HEADERS)

    count = 0
    for record in records:
        ws.append(export_row(record))
        count += 1

    wb.save(fp)
    logger.info("Exported %d records to xlsx", count)
    return count


def write_csv(records: Iterable[StoredRecord], fp: TextIO) -> int:
    writer = csv.writer(fp)
    writer.writerow(EXPORT_HEADERS)
    count = 0
    for record in records:
        writer.writerow(export_row(record))
        count += 1
    logger.info("Exported %d records to csv", count)
    return count

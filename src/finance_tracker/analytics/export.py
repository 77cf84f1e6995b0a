"""CSV export of the current (filtered and sorted) transaction list.

Writes and reads RFC 4180 CSV through the stdlib :mod:`csv` module so vendor
names with commas or quotes survive a round trip.
"""

from __future__ import annotations

import csv
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from io import StringIO
from typing import Iterable

from .models import Transaction
from .parse import parse_amount, parse_date

EXPORT_HEADER = ("Date", "Vendor", "Category", "Amount")


@dataclass(frozen=True)
class ExportRow:
    date: date
    vendor: str
    category: str
    amount: Decimal


def _plain_amount(t: Transaction, prefix: str) -> str:
    p = prefix.strip()
    raw = t.raw_amount.strip()
    if p and raw.startswith(p):
        return raw[len(p):].strip()
    return str(t.amount)


def export_csv(transactions: Iterable[Transaction], prefix: str = "Rs. ") -> str:
    buf = StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(EXPORT_HEADER)
    for t in transactions:
        writer.writerow([t.raw_date, t.vendor, t.category, _plain_amount(t, prefix)])
    return buf.getvalue()[:-1]


def export_filename(today: date | None = None) -> str:
    today = today or date.today()
    return f"finance_tracker_{today.isoformat()}.csv"


def read_export(text: str) -> list[ExportRow]:
    reader = csv.reader(StringIO(text))
    header = next(reader, None)
    if header is None:
        return []
    if tuple(header) != EXPORT_HEADER:
        raise ValueError(f"Unexpected export header: {header!r}")

    rows: list[ExportRow] = []
    for line_no, rec in enumerate(reader, start=2):
        if not rec:
            continue
        if len(rec) != 4:
            raise ValueError(f"Line {line_no}: expected 4 fields, got {len(rec)}")
        when = parse_date(rec[0])
        amount = parse_amount(rec[3], prefix="")
        if when is None or amount is None:
            raise ValueError(f"Line {line_no}: unparseable date or amount")
        rows.append(ExportRow(date=when, vendor=rec[1], category=rec[2], amount=amount))
    return rows

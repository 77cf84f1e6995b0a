from __future__ import annotations

import logging
import re
from datetime import date
from decimal import Decimal
from typing import Iterable

from ..firestore.models import RawTransaction
from .models import ParsedLedger, RejectedRecord, Transaction

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY_PREFIX = "Rs. "

_two_digits_re = re.compile(r"^\d{2}$")
_int_re = re.compile(r"^\d{1,2}$")
_plain_number_re = re.compile(r"^\d+(?:\.\d+)?$")

# whole part stays well inside the 28-digit default context when summed and rounded
MAX_AMOUNT_DIGITS = 18


def parse_amount(raw: str | None, prefix: str = DEFAULT_CURRENCY_PREFIX) -> Decimal | None:
    """
    "Rs. 1200.50" -> Decimal("1200.50"). None for anything that is not a
    prefixed, plain (no exponent), non-negative number with at most
    MAX_AMOUNT_DIGITS digits before the point.
    """
    s = (raw or "").strip()
    if prefix:
        p = prefix.strip()
        if not s.startswith(p):
            return None
        s = s[len(p):].strip()
    if not _plain_number_re.match(s):
        return None
    value = Decimal(s)
    if value.adjusted() >= MAX_AMOUNT_DIGITS:
        return None
    return value


def parse_date(raw: str | None) -> date | None:
    """
    "DD-MM-YY" -> date(2000 + YY, MM, DD). Years outside 2000..2099 cannot be
    expressed, so a year part that is not exactly two digits is rejected.
    """
    parts = (raw or "").strip().split("-")
    if len(parts) != 3:
        return None
    day, month, year = parts
    if not (_int_re.match(day) and _int_re.match(month) and _two_digits_re.match(year)):
        return None
    try:
        return date(2000 + int(year), int(month), int(day))
    except ValueError:
        return None


def _rejection_reason(amount: Decimal | None, when: date | None) -> str:
    bad: list[str] = []
    if amount is None:
        bad.append("amount")
    if when is None:
        bad.append("date")
    return "unparseable " + " and ".join(bad)


def parse_transaction(raw: RawTransaction, prefix: str = DEFAULT_CURRENCY_PREFIX) -> Transaction | None:
    amount = parse_amount(raw.amount, prefix)
    when = parse_date(raw.date)
    if amount is None or when is None:
        return None
    return Transaction(
        id=raw.id,
        vendor=raw.vendor,
        amount=amount,
        date=when,
        category=raw.category,
        type=raw.type,
        raw_amount=raw.amount,
        raw_date=raw.date,
    )


def parse_records(
    records: Iterable[RawTransaction], prefix: str = DEFAULT_CURRENCY_PREFIX
) -> ParsedLedger:
    """
    Parse stored records once at the load boundary.

    Records whose amount or date does not parse are kept out of the ledger and
    reported in ``rejected`` so they cannot corrupt any total.
    """
    good: list[Transaction] = []
    rejected: list[RejectedRecord] = []

    for raw in records:
        tx = parse_transaction(raw, prefix)
        if tx is not None:
            good.append(tx)
            continue

        reason = _rejection_reason(parse_amount(raw.amount, prefix), parse_date(raw.date))
        logger.warning(
            "Skipping record id=%s: %s (amount=%r date=%r)", raw.id, reason, raw.amount, raw.date
        )
        rejected.append(RejectedRecord(id=raw.id, reason=reason, raw=raw.model_dump()))

    return ParsedLedger(transactions=tuple(good), rejected=tuple(rejected))

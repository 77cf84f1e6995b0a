from datetime import date
from decimal import Decimal

import pytest

from finance_tracker.analytics.models import Transaction
from finance_tracker.analytics.sorting import SortSpec, sort_transactions


def _tx(id_: str, vendor: str, amount: str, d: date) -> Transaction:
    return Transaction(
        id=id_,
        vendor=vendor,
        amount=Decimal(amount),
        date=d,
        category="Misc",
        type="debit",
        raw_amount=f"Rs. {amount}",
        raw_date=d.strftime("%d-%m-%y"),
    )


LEDGER = [
    _tx("1", "Zomato", "250", date(2025, 3, 15)),
    _tx("2", "amazon", "100", date(2025, 3, 1)),
    _tx("3", "Big Bazaar", "50", date(2025, 4, 2)),
    _tx("4", "Éclair Café", "75", date(2024, 12, 30)),
]


def test_sort_by_date_desc_is_default():
    out = sort_transactions(LEDGER)
    assert [t.id for t in out] == ["3", "1", "2", "4"]


def test_sort_by_amount_asc():
    out = sort_transactions(LEDGER, "amount", "asc")
    assert [t.amount for t in out] == [Decimal("50"), Decimal("75"), Decimal("100"), Decimal("250")]


def test_vendor_sort_ignores_case_and_accents():
    out = sort_transactions(LEDGER, "vendor", "asc")
    assert [t.vendor for t in out] == ["amazon", "Big Bazaar", "Éclair Café", "Zomato"]


@pytest.mark.parametrize("key", ["date", "amount", "vendor"])
def test_desc_is_reverse_of_asc_without_ties(key):
    asc = sort_transactions(LEDGER, key, "asc")
    desc = sort_transactions(asc, key, "desc")
    assert desc == list(reversed(asc))


@pytest.mark.parametrize("direction", ["asc", "desc"])
def test_equal_keys_keep_original_order(direction):
    same_day = date(2025, 5, 5)
    rows = [
        _tx("a", "X", "10", same_day),
        _tx("b", "Y", "10", same_day),
        _tx("c", "Z", "10", same_day),
    ]
    for key in ("date", "amount"):
        out = sort_transactions(rows, key, direction)
        assert [t.id for t in out] == ["a", "b", "c"]

    twins = [
        _tx("a", "Cafe", "10", date(2025, 1, 1)),
        _tx("b", "Cafe", "20", date(2025, 2, 1)),
        _tx("c", "Cafe", "30", date(2025, 3, 1)),
    ]
    out = sort_transactions(twins, "vendor", direction)
    assert [t.id for t in out] == ["a", "b", "c"]

    again = sort_transactions(sort_transactions(rows, "amount", direction), "amount", direction)
    assert [t.id for t in again] == ["a", "b", "c"]


def test_sort_does_not_mutate_input():
    rows = list(LEDGER)
    sort_transactions(rows, "amount", "asc")
    assert rows == LEDGER


def test_sort_spec_rejects_unknown_values():
    with pytest.raises(ValueError):
        SortSpec(key="category")
    with pytest.raises(ValueError):
        SortSpec(direction="up")

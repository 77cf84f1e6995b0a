import random
from datetime import date
from decimal import Decimal

import pytest

from finance_tracker.analytics.compute import (
    category_spending,
    compact_vendor_ranking,
    compute_facts,
    compute_stats,
    monthly_spending,
    round_units,
    top_category,
    vendor_spending,
)
from finance_tracker.analytics.models import Transaction


def _tx(i: int, vendor: str, amount: str, d: date, category: str = "Misc") -> Transaction:
    return Transaction(
        id=str(i),
        vendor=vendor,
        amount=Decimal(amount),
        date=d,
        category=category,
        type="debit",
        raw_amount=f"Rs. {amount}",
        raw_date=d.strftime("%d-%m-%y"),
    )


def test_round_units_is_half_up():
    assert round_units(Decimal("0.5")) == 1
    assert round_units(Decimal("2.5")) == 3
    assert round_units(Decimal("2.49")) == 2


def test_monthly_buckets_sorted_and_rounded():
    rows = [
        _tx(1, "A", "10.40", date(2025, 11, 3)),
        _tx(2, "B", "0.20", date(2025, 11, 9)),
        _tx(3, "C", "5.50", date(2024, 2, 1)),
        _tx(4, "D", "1", date(2025, 1, 1)),
    ]
    out = monthly_spending(rows)
    assert [(m.month, m.total) for m in out] == [("2024-02", 6), ("2025-01", 1), ("2025-11", 11)]


def test_category_totals_reconcile_with_transactions():
    rng = random.Random(11)
    rows = [
        _tx(i, f"v{i % 7}", f"{rng.randint(1, 900)}.{rng.randint(0, 99):02d}", date(2025, 1, 1), f"c{i % 4}")
        for i in range(50)
    ]
    cats = category_spending(rows)
    exact = sum((t.amount for t in rows), Decimal("0"))
    # each bucket is rounded once, so the drift is at most half a unit per bucket
    assert abs(sum(c.value for c in cats) - exact) <= Decimal("0.5") * len(cats)
    assert [c.value for c in cats] == sorted((c.value for c in cats), reverse=True)
    assert abs(sum(c.percentage for c in cats) - 100.0) < 0.05


def test_category_percentage_zero_total():
    rows = [_tx(1, "A", "0", date(2025, 1, 1), "Free")]
    assert category_spending(rows)[0].percentage == 0.0


def test_vendor_ranking_counts_and_cap():
    rows = [_tx(i, f"vendor{i}", str(100 + i), date(2025, 1, 1)) for i in range(15)]
    rows.append(_tx(99, "vendor0", "500", date(2025, 1, 2)))

    full = vendor_spending(rows)
    assert len(full) == 10
    assert full[0].vendor == "vendor0"
    assert full[0].total == 600
    assert full[0].count == 2
    assert [v.total for v in full] == sorted((v.total for v in full), reverse=True)


@pytest.mark.parametrize("n_vendors", [0, 3, 5, 8, 20])
def test_compact_ranking_is_prefix_of_full(n_vendors):
    rows = [_tx(i, f"v{i}", str((i * 37) % 101), date(2025, 1, 1)) for i in range(n_vendors)]
    full = vendor_spending(rows)
    compact = compact_vendor_ranking(full)
    assert len(compact) == min(5, len(full))
    assert compact == full[: len(compact)]


def test_stats_on_empty_set_are_defined():
    s = compute_stats([])
    assert s.total == 0
    assert s.count == 0
    assert s.average == 0
    assert s.active_months == 0
    assert s.max_amount is None
    assert s.min_amount is None

    facts = compute_facts([])
    assert facts["totals"]["max_amount"] is None
    assert facts["totals"]["average_rounded"] == 0
    assert facts["top_category"] is None


def test_top_category():
    assert top_category([]) is None
    rows = [_tx(1, "A", "5", date(2025, 1, 1), "Food"), _tx(2, "B", "9", date(2025, 1, 1), "Rent")]
    assert top_category(category_spending(rows)).name == "Rent"

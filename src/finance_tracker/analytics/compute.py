from __future__ import annotations

from collections import defaultdict
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from .models import CategorySpending, MonthlySpending, SpendingStats, Transaction, VendorSpending

TOP_VENDORS_FULL = 10
TOP_VENDORS_COMPACT = 5

_ZERO = Decimal("0")


def round_units(value: Decimal) -> int:
    # half-up, so 0.5 -> 1 the way the charts have always shown it
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def month_key(t: Transaction) -> str:
    return f"{t.date.year:04d}-{t.date.month:02d}"


def monthly_spending(transactions: list[Transaction]) -> list[MonthlySpending]:
    by_month: dict[str, Decimal] = defaultdict(Decimal)
    for t in transactions:
        by_month[month_key(t)] += t.amount

    return [MonthlySpending(month=k, total=round_units(v)) for k, v in sorted(by_month.items())]


def category_spending(transactions: list[Transaction]) -> list[CategorySpending]:
    by_category: dict[str, Decimal] = defaultdict(Decimal)
    for t in transactions:
        by_category[t.category] += t.amount

    grand_total = sum(by_category.values(), _ZERO)

    def share(v: Decimal) -> float:
        if grand_total == 0:
            return 0.0
        return float((v / grand_total * 100).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))

    out = [
        CategorySpending(name=k, value=round_units(v), percentage=share(v))
        for k, v in by_category.items()
    ]
    out.sort(key=lambda x: x.value, reverse=True)
    return out


def vendor_spending(
    transactions: list[Transaction], limit: int = TOP_VENDORS_FULL
) -> list[VendorSpending]:
    totals: dict[str, Decimal] = defaultdict(Decimal)
    counts: dict[str, int] = defaultdict(int)
    for t in transactions:
        totals[t.vendor] += t.amount
        counts[t.vendor] += 1

    out = [VendorSpending(vendor=k, total=round_units(v), count=counts[k]) for k, v in totals.items()]
    out.sort(key=lambda x: x.total, reverse=True)
    return out[: max(0, int(limit))]


def compact_vendor_ranking(
    full_ranking: list[VendorSpending], limit: int = TOP_VENDORS_COMPACT
) -> list[VendorSpending]:
    """Narrow-display ranking: always a prefix of the full one."""
    return full_ranking[: max(0, int(limit))]


def compute_stats(transactions: list[Transaction]) -> SpendingStats:
    count = len(transactions)
    total = sum((t.amount for t in transactions), _ZERO)
    amounts = [t.amount for t in transactions]
    months = {month_key(t) for t in transactions}

    return SpendingStats(
        total=total,
        count=count,
        average=(total / count) if count else _ZERO,
        active_months=len(months),
        max_amount=max(amounts) if amounts else None,
        min_amount=min(amounts) if amounts else None,
    )


def top_category(categories: list[CategorySpending]) -> CategorySpending | None:
    return categories[0] if categories else None


def compute_facts(transactions: list[Transaction]) -> dict[str, Any]:
    """Plain-dict summary of the aggregate views (JSON friendly)."""
    stats = compute_stats(transactions)
    categories = category_spending(transactions)
    vendors = vendor_spending(transactions)
    top = top_category(categories)

    def _num(v: Decimal | None) -> float | None:
        return None if v is None else float(v)

    return {
        "transactions_count": stats.count,
        "totals": {
            "total": float(stats.total),
            "total_rounded": round_units(stats.total),
            "average": float(stats.average),
            "average_rounded": round_units(stats.average),
            "max_amount": _num(stats.max_amount),
            "min_amount": _num(stats.min_amount),
        },
        "active_months": stats.active_months,
        "monthly": [{"month": m.month, "total": m.total} for m in monthly_spending(transactions)],
        "categories": [
            {"name": c.name, "value": c.value, "percentage": c.percentage} for c in categories
        ],
        "top_vendors": [{"vendor": v.vendor, "total": v.total, "count": v.count} for v in vendors],
        "top_category": None if top is None else {"name": top.name, "value": top.value},
    }

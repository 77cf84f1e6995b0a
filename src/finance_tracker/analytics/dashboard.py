from __future__ import annotations

from dataclasses import dataclass

from .compute import (
    compact_vendor_ranking,
    category_spending,
    compute_stats,
    monthly_spending,
    top_category,
    vendor_spending,
)
from .filters import FilterCriteria, active_filter_count, filter_transactions
from .models import (
    CategorySpending,
    MonthlySpending,
    ParsedLedger,
    RejectedRecord,
    SpendingStats,
    Transaction,
    VendorSpending,
)
from .sorting import SortSpec, sort_transactions


@dataclass(frozen=True)
class DashboardView:
    filters: FilterCriteria
    sort: SortSpec
    filtered: list[Transaction]
    ordered: list[Transaction]
    monthly: list[MonthlySpending]
    categories: list[CategorySpending]
    vendors: list[VendorSpending]
    vendors_compact: list[VendorSpending]
    stats: SpendingStats
    top_category: CategorySpending | None
    category_options: list[str]
    year_options: list[int]
    active_filters: int
    rejected: tuple[RejectedRecord, ...]


def category_options(transactions: tuple[Transaction, ...] | list[Transaction]) -> list[str]:
    """Distinct categories in first-seen order; the set is whatever the data holds."""
    seen: dict[str, None] = {}
    for t in transactions:
        seen.setdefault(t.category, None)
    return list(seen)


def year_options(transactions: tuple[Transaction, ...] | list[Transaction]) -> list[int]:
    return sorted({t.date.year for t in transactions})


def build_dashboard(
    ledger: ParsedLedger,
    filters: FilterCriteria | None = None,
    sort: SortSpec | None = None,
) -> DashboardView:
    """
    Pure recomputation of every derived view from (ledger, filters, sort).

    Options lists come from the full ledger, everything else from the
    filtered subset.
    """
    filters = filters or FilterCriteria()
    sort = sort or SortSpec()

    filtered = filter_transactions(ledger.transactions, filters)
    categories = category_spending(filtered)
    vendors = vendor_spending(filtered)

    return DashboardView(
        filters=filters,
        sort=sort,
        filtered=filtered,
        ordered=sort_transactions(filtered, sort.key, sort.direction),
        monthly=monthly_spending(filtered),
        categories=categories,
        vendors=vendors,
        vendors_compact=compact_vendor_ranking(vendors),
        stats=compute_stats(filtered),
        top_category=top_category(categories),
        category_options=category_options(ledger.transactions),
        year_options=year_options(ledger.transactions),
        active_filters=active_filter_count(filters),
        rejected=ledger.rejected,
    )

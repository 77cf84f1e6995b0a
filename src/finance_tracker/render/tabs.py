from __future__ import annotations

from ..analytics.compute import round_units
from ..analytics.dashboard import DashboardView
from ..analytics.filters import FilterCriteria
from ..analytics.models import CategorySpending, VendorSpending
from .templates import bullets, error, info, money, report_layout, section, warning

TRANSACTION_PAGE = 50
_BAR_WIDTH = 24


def _bar(value: int, peak: int) -> str:
    if peak <= 0 or value <= 0:
        return ""
    return "█" * max(1, round(_BAR_WIDTH * value / peak))


def filters_line(view: DashboardView) -> str:
    if view.active_filters == 0:
        return "Filter & Search: refine your view"
    return f"Filter & Search: {view.active_filters} active filters ({describe_filters(view.filters)})"


def describe_filters(f: FilterCriteria) -> str:
    parts: list[str] = []
    if f.year is not None:
        parts.append(f"year={f.year}")
    if f.month is not None:
        parts.append(f"month={f.month}")
    if f.category is not None:
        parts.append(f"category={f.category}")
    if f.vendor_search:
        parts.append(f"vendor~{f.vendor_search!r}")
    if f.min_amount is not None:
        parts.append(f"min={f.min_amount}")
    if f.max_amount is not None:
        parts.append(f"max={f.max_amount}")
    return ", ".join(parts)


def options_block(view: DashboardView) -> str:
    years = ", ".join(str(y) for y in view.year_options) or "none"
    categories = ", ".join(view.category_options) or "none"
    return section("Available filters", [f"Years: {years}", f"Categories: {categories}"])


def stats_block(view: DashboardView) -> str:
    s = view.stats
    return section(
        "Summary",
        [
            f"Total Spending: {money(s.total)}",
            f"Transactions: {s.count}",
            f"Avg / Txn: {money(round_units(s.average))}",
            f"Active Months: {s.active_months}",
        ],
    )


def rejected_block(view: DashboardView) -> str | None:
    if not view.rejected:
        return None
    lines = [f"{r.id}: {r.reason}" for r in view.rejected[:10]]
    more = len(view.rejected) - len(lines)
    if more > 0:
        lines.append(f"... and {more} more")
    return warning(f"{len(view.rejected)} records skipped (could not be parsed)") + "\n" + bullets(lines)


def _category_lines(categories: list[CategorySpending]) -> list[str]:
    peak = categories[0].value if categories else 0
    return [
        f"{c.name:<16} {money(c.value):>12} {c.percentage:6.2f}%  {_bar(c.value, peak)}"
        for c in categories
    ]


def _vendor_lines(vendors: list[VendorSpending]) -> list[str]:
    peak = vendors[0].total if vendors else 0
    return [
        f"{i:>2}. {v.vendor:<24} {money(v.total):>12}  x{v.count:<3} {_bar(v.total, peak)}"
        for i, v in enumerate(vendors, start=1)
    ]


def render_overview(view: DashboardView) -> str:
    peak = max((m.total for m in view.monthly), default=0)
    monthly = [f"{m.month}  {money(m.total):>12}  {_bar(m.total, peak)}" for m in view.monthly]
    return report_layout(
        "Overview",
        [
            filters_line(view),
            stats_block(view),
            section("Spending Trend", monthly or [info("No transactions match the current filters.")]),
            section("By Category", _category_lines(view.categories)),
            options_block(view),
            rejected_block(view),
        ],
    )


def render_transactions(view: DashboardView, limit: int = TRANSACTION_PAGE) -> str:
    rows = view.ordered[: max(0, limit)]
    lines = [
        f"{t.date.isoformat()}  {t.vendor:<24} {t.category:<16} {money(t.amount, decimals=2):>14}"
        for t in rows
    ]
    if len(view.ordered) > len(rows):
        lines.append(f"... and {len(view.ordered) - len(rows)} more transactions")
    title = f"Transactions (sorted by {view.sort.key}, {view.sort.direction})"
    return report_layout(
        "Transactions",
        [
            filters_line(view),
            section(title, lines or [info("No transactions match the current filters.")]),
        ],
    )


def render_analysis(view: DashboardView, compact: bool = False) -> str:
    vendors = view.vendors_compact if compact else view.vendors
    return report_layout(
        "Analysis",
        [
            filters_line(view),
            section("Category Breakdown", _category_lines(view.categories)),
            section(f"Top {len(vendors)} Vendors", _vendor_lines(vendors)),
        ],
    )


def render_insights(view: DashboardView) -> str:
    s = view.stats
    top = view.top_category
    return report_layout(
        "Insights",
        [
            filters_line(view),
            section("Biggest Purchase", [money(s.max_amount, decimals=2), "Single transaction maximum"]),
            section("Lowest Purchase", [money(s.min_amount, decimals=2), "Single transaction minimum"]),
            section(
                "Top Category",
                [
                    top.name if top else "N/A",
                    f"{money(top.value if top else 0)} spent total",
                ],
            ),
        ],
    )


def render_load_failure(message: str | None) -> str:
    return "\n".join(
        [
            error("Could not load transactions."),
            message or "Unknown error",
            "Run the command again to retry.",
        ]
    )

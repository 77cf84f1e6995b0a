from decimal import Decimal

from finance_tracker.analytics.dashboard import build_dashboard
from finance_tracker.analytics.filters import FilterCriteria
from finance_tracker.analytics.parse import parse_records
from finance_tracker.firestore.models import RawTransaction
from finance_tracker.render import tabs, templates


def _ledger():
    return parse_records(
        [
            RawTransaction(id="1", vendor="Cafe", amount="Rs. 100.00", date="01-03-25", category="Food"),
            RawTransaction(id="2", vendor="Diner", amount="Rs. 250.00", date="15-03-25", category="Food"),
            RawTransaction(id="3", vendor="Metro", amount="Rs. 50.00", date="02-04-25", category="Transport"),
            RawTransaction(id="4", vendor="Broken", amount="Rs. ?", date="02-04-25", category="Transport"),
        ]
    )


def test_money_uses_indian_grouping():
    assert templates.money(100) == "₹100"
    assert templates.money(123456) == "₹1,23,456"
    assert templates.money(12345678) == "₹1,23,45,678"
    assert templates.money(Decimal("1200.5")) == "₹1,201"
    assert templates.money(Decimal("1200.50"), decimals=2) == "₹1,200.50"
    assert templates.money(Decimal("250.00"), decimals=2) == "₹250"
    assert templates.money(None) == "N/A"


def test_report_layout_skips_empty_blocks():
    text = templates.report_layout("HEADER", ["A", None, "", "B"])
    assert text.index("HEADER") < text.index("A") < text.index("B")
    assert text.count(templates.divider()) == 2


def test_overview_shows_stats_and_skipped_records():
    text = tabs.render_overview(build_dashboard(_ledger()))
    assert "Total Spending: ₹400" in text
    assert "Transactions: 3" in text
    assert "Avg / Txn: ₹133" in text
    assert "Active Months: 2" in text
    assert "2025-03" in text
    assert "1 records skipped" in text


def test_insights_on_empty_selection():
    text = tabs.render_insights(build_dashboard(_ledger(), FilterCriteria(category="Rent")))
    assert "Biggest Purchase\nN/A" in text
    assert "Lowest Purchase\nN/A" in text
    assert "Top Category\nN/A" in text
    assert "1 active filters" in text


def test_analysis_compact_lists_five_or_fewer():
    text = tabs.render_analysis(build_dashboard(_ledger()), compact=True)
    assert "Top 3 Vendors" in text
    assert "Diner" in text


def test_transactions_tab_respects_limit():
    text = tabs.render_transactions(build_dashboard(_ledger()), limit=1)
    assert "2025-04-02" in text
    assert "... and 2 more transactions" in text


def test_load_failure_message():
    text = tabs.render_load_failure("503 Service Unavailable")
    assert "Could not load transactions" in text
    assert "503" in text


def test_overview_lists_filter_options_from_data():
    text = tabs.render_overview(build_dashboard(_ledger(), FilterCriteria(category="Transport")))
    assert "Available filters" in text
    assert "Years: 2025" in text
    assert "Categories: Food, Transport" in text


def test_options_block_on_empty_ledger():
    text = tabs.options_block(build_dashboard(parse_records([])))
    assert "Years: none" in text
    assert "Categories: none" in text

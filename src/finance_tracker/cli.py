import argparse
import json
import logging
from pathlib import Path

from . import __version__
from .config import load_settings
from .logging_setup import setup_logging

TAB_COMMANDS = ["overview", "transactions", "analysis", "insights"]


def mask(value: str | None, show: int = 4) -> str:
    if not value:
        return "None"
    if len(value) <= show:
        return "*" * len(value)
    return value[:show] + "*" * (len(value) - show)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="finance-tracker")
    parser.add_argument("--version", action="store_true", help="Print version and exit")
    parser.add_argument(
        "command",
        nargs="?",
        default="health",
        choices=["health", "status-env", *TAB_COMMANDS, "export"],
        help="Command to run",
    )

    parser.add_argument(
        "--source",
        type=Path,
        default=None,
        help="Read transactions from a local JSON snapshot instead of Firestore",
    )

    filters = parser.add_argument_group("filters")
    filters.add_argument("--month", default="all", help="1-12 or 'all'")
    filters.add_argument("--year", default="all", help="four-digit year or 'all'")
    filters.add_argument("--category", default="all", help="exact category or 'all'")
    filters.add_argument("--vendor", default="", help="case-insensitive vendor substring")
    filters.add_argument("--min-amount", default="", help="inclusive lower bound")
    filters.add_argument("--max-amount", default="", help="inclusive upper bound")

    sorting = parser.add_argument_group("sorting")
    sorting.add_argument("--sort-by", choices=["date", "amount", "vendor"], default="date")
    sorting.add_argument("--order", choices=["asc", "desc"], default="desc")

    parser.add_argument(
        "--compact", action="store_true", help="Top 5 vendors instead of top 10 (analysis)"
    )
    parser.add_argument("--limit", type=int, default=50, help="Rows to print (transactions)")
    parser.add_argument("--json", action="store_true", help="Print aggregated facts as JSON")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Export destination (default: finance_tracker_<today>.csv in the current directory)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return 0

    settings = load_settings()
    setup_logging(settings.log_level)

    logger = logging.getLogger(__name__)

    if args.command == "health":
        logger.info("Application started successfully.")
        print("ok")
        return 0

    if args.command == "status-env":
        print("FIRESTORE_PROJECT_ID =", settings.firestore_project_id)
        print("FIRESTORE_API_KEY =", mask(settings.firestore_api_key))
        print("FIRESTORE_DATABASE =", settings.firestore_database)
        print("FIRESTORE_COLLECTION =", settings.firestore_collection)
        print("CURRENCY_PREFIX =", repr(settings.currency_prefix))
        print("LOG_LEVEL =", settings.log_level)
        return 0

    from .analytics.compute import compute_facts
    from .analytics.dashboard import build_dashboard
    from .analytics.filters import FilterCriteria
    from .analytics.sorting import SortSpec
    from .firestore.loader import FirestoreSource, JsonFileSource, load_ledger
    from .render import tabs

    try:
        criteria = FilterCriteria.from_options(
            month=args.month,
            year=args.year,
            category=args.category,
            vendor_search=args.vendor,
            min_amount=args.min_amount,
            max_amount=args.max_amount,
        )
    except ValueError as e:
        parser.error(f"invalid filter: {e}")

    source = JsonFileSource(args.source) if args.source else FirestoreSource(settings)
    state = load_ledger(source, prefix=settings.currency_prefix)
    if not state.ok:
        print(tabs.render_load_failure(state.error))
        return 2

    view = build_dashboard(state.ledger, criteria, SortSpec(key=args.sort_by, direction=args.order))

    if args.command == "export":
        from .analytics.export import export_csv, export_filename

        out = args.output or Path(export_filename())
        out.write_text(export_csv(view.ordered, prefix=settings.currency_prefix), encoding="utf-8")
        logger.info("Exported %d transactions to %s", len(view.ordered), out)
        print(f"exported {len(view.ordered)} transactions -> {out}")
        return 0

    if args.json:
        print(json.dumps(compute_facts(view.filtered), ensure_ascii=False, indent=2))
        return 0

    if args.command == "overview":
        print(tabs.render_overview(view))
    elif args.command == "transactions":
        print(tabs.render_transactions(view, limit=args.limit))
    elif args.command == "analysis":
        print(tabs.render_analysis(view, compact=args.compact))
    else:
        print(tabs.render_insights(view))
    return 0

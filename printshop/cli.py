from __future__ import annotations

import argparse
import json
from datetime import date

from printshop.api.utils import to_payload
from printshop.core.config import get_settings
from printshop.core.logging import configure_logging
from printshop.demo import seed_demo_data
from printshop.domain.reports import DateWindow, build_reports, cashflow_series
from printshop.persistence.db import init_db, session_scope
from printshop.services import load_snapshot

REPORT_NAMES = ["sales", "expenses", "top_customers", "best_materials", "cashflow"]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Print shop order-to-cash CLI")
    top = parser.add_subparsers(dest="command", required=True)

    top.add_parser("seed", help="Seed the demo dataset (no-op when orders exist)")

    report = top.add_parser("report", help="Print a report as JSON")
    report.add_argument("name", choices=REPORT_NAMES)
    report.add_argument("--start", type=date.fromisoformat, default=None, help="YYYY-MM-DD, inclusive")
    report.add_argument("--end", type=date.fromisoformat, default=None, help="YYYY-MM-DD, inclusive")

    return parser


def _run_seed() -> int:
    init_db()
    with session_scope() as session:
        result = seed_demo_data(session)
    print(json.dumps(result, indent=2))
    return 0


def _run_report(args: argparse.Namespace) -> int:
    init_db()
    window = DateWindow(start=args.start, end=args.end)
    with session_scope() as session:
        snapshot = load_snapshot(session)
        if args.name == "cashflow":
            output = {
                "data": to_payload(
                    cashflow_series(
                        snapshot.orders,
                        snapshot.expenses,
                        window,
                        bucket_limit=get_settings().cashflow_bucket_limit,
                    )
                )
            }
        else:
            report = build_reports(snapshot.orders, snapshot.expenses, snapshot.catalog, window)[args.name]
            output = {"data": to_payload(report.data), "summary": report.summary}
    print(json.dumps({"report": args.name, **output}, ensure_ascii=False, indent=2, default=str))
    return 0


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "seed":
        return _run_seed()
    if args.command == "report":
        return _run_report(args)

    parser.error("unsupported command")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())

#!/usr/bin/env python3
"""
SpendSight CLI — balance projections, chart windows, and the API server.

USAGE:
  python -m spendsight.cli project transactions.csv                       # Actual vs projected balance
  python -m spendsight.cli project txns.json --config '{"Dining": 50}'     # Halve dining spend
  python -m spendsight.cli project txns.csv --config plan.json --excel out.xlsx
  python -m spendsight.cli project plaid.csv --polarity debit_positive     # Positive amount = money out

  python -m spendsight.cli window txns.csv --zoom 4 --center 0.25          # Visible slice of the series

  python -m spendsight.cli serve                                           # Start API server
  python -m spendsight.cli serve --port 8000
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from spendsight.config import REPORTS_FOLDER
from spendsight.data.normalize import normalize_transactions
from spendsight.data.schemas import Polarity, SpendSightError
from spendsight.data.sources import FileSource
from spendsight.logging_setup import configure_logging


def _load_config(raw: str | None) -> dict:
    """--config accepts inline JSON or a path to a JSON file."""
    if not raw:
        return {}
    path = Path(raw)
    text = path.read_text() if path.suffix.lower() == ".json" and path.exists() else raw
    config = json.loads(text)
    if not isinstance(config, dict):
        raise ValueError("--config must be a JSON object of category -> percentage")
    return config


def _load_transactions(args):
    source = FileSource(args.file, args.polarity)
    return normalize_transactions(source.fetch(), source.polarity)


def cmd_project(args) -> int:
    """Print actual vs projected balance and per-category savings."""
    from spendsight.analytics.projection import projection_summary

    txns = _load_transactions(args)
    config = _load_config(args.config)
    s = projection_summary(txns, config)

    print("\n" + "=" * 70)
    print("  SPENDSIGHT — BALANCE PROJECTION")
    print("=" * 70)
    if txns:
        print(f"  {len(txns):,} transactions  |  {txns[0].date} to {txns[-1].date}")
    print(f"\n  Actual balance:     ${s['final_balance']:>12,.2f}")
    print(f"  Projected balance:  ${s['projected_balance']:>12,.2f}")
    print(f"  Saved under plan:   ${s['total_saved']:>12,.2f}  ({s['adjusted_debits']} debits adjusted)")

    if s["by_category"]:
        print(f"\n  {'CATEGORY':<30}{'KEPT %':>8}{'SPENT':>14}{'SAVED':>14}")
        for c in s["by_category"]:
            print(f"  {c['category'][:28]:<30}{c['percentage']:>7.0f}%"
                  f"{c['spent']:>14,.2f}{c['saved']:>14,.2f}")

    if args.excel:
        from spendsight.reports.projection_report import generate_excel
        out = Path(args.excel)
        if not out.is_absolute() and out.parent == Path("."):
            out = REPORTS_FOLDER / out
        path = generate_excel(txns, out, config)
        print(f"\n  Excel report: {path}")
    print()
    return 0


def cmd_window(args) -> int:
    """Print the slice of the running balance visible at --zoom/--center."""
    from spendsight.analytics.projection import with_running_total
    from spendsight.analytics.windowing import WindowState, visible_bounds

    txns = with_running_total(_load_transactions(args))
    state = WindowState(zoom_level=args.zoom, zoom_center=args.center)
    start, end = visible_bounds(len(txns), state.zoom_level, state.zoom_center)

    print(f"\n  Zoom {state.zoom_percent}%  |  center {state.zoom_center:.3f}  |  "
          f"rows {start}-{end} of {len(txns)}\n")
    for t in txns[start:end + 1]:
        sign = "+" if t.is_credit else "-"
        print(f"  {t.date}  {t.name[:32]:<34}{sign}{t.amount:>10,.2f}  {t.overall_total:>12,.2f}")
    print()
    return 0


def cmd_serve(args) -> int:
    """Start the API server."""
    import uvicorn

    print(f"\n  SpendSight API — http://{args.host}:{args.port}/docs\n")
    uvicorn.run("spendsight.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spendsight",
        description="SpendSight — balance projections under category spending reductions",
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING (default: env or INFO)")
    sub = parser.add_subparsers(dest="command")
    polarities = [p.value for p in Polarity]

    p_proj = sub.add_parser("project", help="Project the balance under a spending plan")
    p_proj.add_argument("file", help="CSV or JSON transaction export")
    p_proj.add_argument("--config", help='Inline JSON or .json file, e.g. \'{"Dining": 50}\'')
    p_proj.add_argument("--polarity", choices=polarities, default=Polarity.EXPLICIT.value)
    p_proj.add_argument("--excel", help="Write an Excel report to this path")
    p_proj.set_defaults(func=cmd_project)

    p_win = sub.add_parser("window", help="Show the visible slice at a zoom level")
    p_win.add_argument("file", help="CSV or JSON transaction export")
    p_win.add_argument("--zoom", type=float, default=1.0, help="1 (all) to 5")
    p_win.add_argument("--center", type=float, default=0.5, help="0 (oldest) to 1 (newest)")
    p_win.add_argument("--polarity", choices=polarities, default=Polarity.EXPLICIT.value)
    p_win.set_defaults(func=cmd_window)

    p_serve = sub.add_parser("serve", help="Start the API server")
    p_serve.add_argument("--host", default="0.0.0.0")
    p_serve.add_argument("--port", type=int, default=8000)
    p_serve.add_argument("--reload", action="store_true")
    p_serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    configure_logging(args.log_level)
    try:
        return args.func(args)
    except (SpendSightError, FileNotFoundError, ValueError) as exc:
        print(f"  Error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())

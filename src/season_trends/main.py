"""CLI entry point for the season trends chart."""

from __future__ import annotations

import argparse
import json
import logging
from typing import Any

from season_trends.config import settings
from season_trends.services.logging_service import LoggingService
from season_trends.viewmodels.trend_chart_viewmodel import TrendChartViewModel

log = logging.getLogger(__name__)


def _load(args: argparse.Namespace) -> TrendChartViewModel:
    vm = TrendChartViewModel()
    vm.load_csv(args.data)
    return vm


def cmd_show(args: argparse.Namespace) -> int:
    from season_trends.views.trend_chart_view import launch  # Qt only needed here

    return launch(_load(args))


def cmd_export(args: argparse.Namespace) -> int:
    vm = _load(args)
    state = vm.load_state
    if not state.ready:
        print(json.dumps({"status": state.status.value, "kind": state.kind, "reason": state.reason}))
        return 1
    vm.apply("league", args.league)
    vm.apply("metric", args.metric)
    vm.apply("year_range", (args.year_from or vm.dataset.min_year, args.year_to or vm.dataset.max_year))
    vm.apply("team", args.team)
    vm.export(args.out, format=args.format)
    assert vm.chart is not None
    summary: dict[str, Any] = {
        "status": "ok",
        "title": vm.chart.title,
        "legend": vm.chart.legend_labels(),
        "out": args.out,
    }
    print(json.dumps(summary, indent=2, ensure_ascii=False))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="season-trends")
    p.add_argument("--data", default=settings.DATA_PATH, help="Path to Teams.csv")
    p.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    p.add_argument("--log-file", default=None, help="Write the run's log records here as JSON Lines")
    sub = p.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="Open the interactive chart window")
    show.set_defaults(func=cmd_show)

    export = sub.add_parser("export", help="Render one filter selection to PNG/SVG")
    export.add_argument("--out", required=True, help="Output file path")
    export.add_argument("--format", choices=("png", "svg"), default="png")
    export.add_argument("--league", default=settings.DEFAULT_LEAGUE)
    export.add_argument("--team", default=settings.ALL)
    export.add_argument("--metric", default=settings.COMBINED)
    export.add_argument("--from", dest="year_from", type=int, default=None)
    export.add_argument("--to", dest="year_to", type=int, default=None)
    export.set_defaults(func=cmd_export)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, str(args.log_level).upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel(level)
    if not args.log_file:
        return args.func(args)
    logs = LoggingService()
    logs.attach_root()
    try:
        return args.func(args)
    finally:
        logs.detach_root()
        written = logs.export_jsonl(args.log_file)
        log.debug("Wrote %d log records to %s", written, args.log_file)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

from __future__ import annotations

import argparse
import datetime as dt
import logging
import sys
import webbrowser
from pathlib import Path

import yaml

from .config import ConfigValidationError, load_config
from .hit_test import map_point_to_domain
from .owner_ordering import parse_owner_sequence
from .parse_tasks import TaskSourceError, load_tasks
from .render_svg import render_svg
from .timeline import build_frame, owner_order_for
from .timeline_models import TimelineConfig
from .zoom import clamp_zoom

logger = logging.getLogger("timeline_view")


def _parse_date(value: str) -> dt.date:
    try:
        return dt.date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD") from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Owner-grouped timeline renderer",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("items", help="Path to exported list items (YAML or JSON)")
    parser.add_argument("--config", help="Path to view configuration YAML")
    parser.add_argument("--out", default="output/timeline.svg", help="Output SVG path")
    parser.add_argument("--start", type=_parse_date, help="Chart start date (YYYY-MM-DD); defaults to Jan 1 this year")
    parser.add_argument("--zoom", type=int, help="Pixels per day; defaults to the configured zoom")
    parser.add_argument("--owners", help="Comma-separated owner sequence, overrides the config")
    parser.add_argument(
        "--include-earlier",
        action="store_true",
        help="Keep tasks that start before the chart start date",
    )
    parser.add_argument(
        "--probe",
        nargs=2,
        type=float,
        metavar=("X", "Y"),
        help="Print the date and owner under a pixel position instead of rendering",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    parser.add_argument(
        "--view",
        dest="view",
        action="store_true",
        default=False,
        help="Best-effort open the output file after rendering",
    )
    return parser


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    try:
        config = load_config(args.config) if args.config else TimelineConfig()
    except (yaml.YAMLError, ConfigValidationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except FileNotFoundError:
        print(f"Error: config file not found: {args.config}", file=sys.stderr)
        return 1

    if args.owners is not None:
        config.owner_sequence = parse_owner_sequence(args.owners)

    chart_start = args.start or config.chart_start or dt.date(dt.date.today().year, 1, 1)
    pixels_per_day = clamp_zoom(args.zoom if args.zoom is not None else config.zoom.default, config.zoom)

    try:
        grouped = load_tasks(
            args.items,
            config.columns,
            since=None if args.include_earlier else chart_start,
        )
    except (yaml.YAMLError, TaskSourceError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    except FileNotFoundError:
        print(f"Error: items file not found: {args.items}", file=sys.stderr)
        return 1
    except Exception as exc:  # Unexpected
        print(f"Unexpected error while loading items: {exc}", file=sys.stderr)
        return 1

    if args.probe:
        x, y = args.probe
        owners = owner_order_for(grouped, config.owner_sequence)
        hit = map_point_to_domain(x, y, 0, chart_start, pixels_per_day, owners)
        date_text = hit.date.isoformat() if hit.date else "-"
        print(f"{date_text}\t{hit.owner if hit.owner is not None else '-'}")
        return 0

    frame = build_frame(grouped, chart_start, pixels_per_day, config.owner_sequence, zoom=config.zoom)

    try:
        render_svg(frame, out_path=args.out, title=config.title)
    except Exception as exc:
        print(f"Unexpected error while rendering: {exc}", file=sys.stderr)
        return 1

    if args.view:
        try:
            webbrowser.open(Path(args.out).resolve().as_uri())
        except webbrowser.Error:
            logger.warning("Could not open %s in a browser", args.out)

    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

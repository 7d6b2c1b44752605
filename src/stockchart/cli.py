"""Command line entry point: render a quote CSV file as a stock chart.

Settings are read from the environment and .env first (see
stockchart.config); command line options override them.
"""

import argparse
import sys
from pathlib import Path

from stockchart.chart import OUTPUT_FORMATS, StockChart
from stockchart.config import ChartSettings
from stockchart.exceptions import ChartError
from stockchart.logging import get_logger, setup_logging
from stockchart.models import Granularity, PriceShape


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="stockchart", description=__doc__)
    parser.add_argument("csv", type=Path, help="Quote CSV: date[,open,high,low,close][,volume] per row")
    parser.add_argument(
        "output",
        type=Path,
        help=f"Output file; the suffix picks the format ({', '.join(OUTPUT_FORMATS)})",
    )
    parser.add_argument("--by", choices=[g.value for g in Granularity], help="Date axis granularity")
    parser.add_argument("--heading", help="Chart heading")
    parser.add_argument("--epic", help="Exchange code of the stock, used as the default heading")
    parser.add_argument("--shape", choices=[s.value for s in PriceShape], help="Price mark shape")
    parser.add_argument("--show-lines", action="store_true", help="Draw vertical lines at date ticks")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING...)")
    parser.add_argument(
        "--log-format",
        choices=["console", "json"],
        help="Log renderer; defaults to LOG_FORMAT or console",
    )
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> ChartSettings:
    """Apply command line overrides on top of the environment settings."""
    settings = ChartSettings()
    if args.log_level:
        settings.log_level = args.log_level
    if args.heading is not None:
        settings.heading = args.heading
    if args.epic is not None:
        settings.epic = args.epic
    if args.by:
        settings.dates.by = Granularity(args.by)
    if args.shape:
        settings.price.shape = PriceShape(args.shape)
    if args.show_lines:
        settings.grid.show_lines = True
    return settings


def main(argv: list[str] | None = None) -> int:
    """Render the chart and return the process exit code."""
    args = parse_args(argv)
    settings = build_settings(args)
    setup_logging(settings.log_level, args.log_format)
    logger = get_logger("stockchart.cli")

    chart = StockChart(settings)
    try:
        chart.load_csv(args.csv)
        path = chart.output(args.output)
    except (ChartError, ValueError, OSError) as e:
        logger.error("chart_failed", csv=str(args.csv), error=str(e), error_type=type(e).__name__)
        return 1

    logger.info("chart_written", path=str(path), slots=len(chart.axis) if chart.axis else 0)
    return 0


if __name__ == "__main__":
    sys.exit(main())

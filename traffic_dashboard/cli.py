# ==============================================
# CLI: Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Provides command-line interface to the dashboard core.
#   This is how users interact with the system outside a browser.
#
# COMMANDS:
# ---------
# 1. Headline figures (sample data unless --file is given):
#    python -m traffic_dashboard.cli summary --file data.csv
#
# 2. Aggregate along one dimension:
#    python -m traffic_dashboard.cli analyze hour --file data.csv
#
# 3. Month-over-month growth and seasons:
#    python -m traffic_dashboard.cli trends
#
# 4. Most recent readings:
#    python -m traffic_dashboard.cli recent
#
# 5. Simulated training / prediction:
#    python -m traffic_dashboard.cli train --model-type ensemble
#    python -m traffic_dashboard.cli predict --date 2024-01-15 --time 08:00
#
# ==============================================

import argparse
import json
import logging
import sys
from typing import List, Optional

from traffic_dashboard.config import get_config
from traffic_dashboard.analysis import Dimension
from traffic_dashboard.dashboard import TrafficDashboard
from traffic_dashboard.exceptions import TrafficDashboardError
from traffic_dashboard.simulation import ModelConfig, ModelType, PredictionRequest


DIMENSIONS = {
    "location": Dimension.LOCATION,
    "hour": Dimension.HOUR,
    "weekday": Dimension.DAY_OF_WEEK,
    "month": Dimension.MONTH,
    "season": Dimension.SEASON,
    "weather": Dimension.WEATHER,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="traffic-dashboard",
        description="Traffic sensor analytics from CSV data"
    )
    parser.add_argument("--json", action="store_true", help="Print raw JSON instead of tables")
    subparsers = parser.add_subparsers(dest="command", required=True)

    def with_file(sub: argparse.ArgumentParser) -> argparse.ArgumentParser:
        sub.add_argument("--file", "-f", help="CSV file to load (defaults to sample data)")
        return sub

    with_file(subparsers.add_parser("summary", help="Show headline figures"))

    analyze = with_file(subparsers.add_parser("analyze", help="Aggregate along one dimension"))
    analyze.add_argument("dimension", choices=sorted(DIMENSIONS))

    with_file(subparsers.add_parser("trends", help="Monthly growth and seasonal averages"))
    with_file(subparsers.add_parser("recent", help="Most recent readings"))

    train = with_file(subparsers.add_parser("train", help="Run a simulated training job"))
    train.add_argument("--model-type", choices=[m.value for m in ModelType], default="neural")
    train.add_argument("--epochs", type=int, default=100)
    train.add_argument("--validation-split", type=float, default=0.2)

    predict = subparsers.add_parser("predict", help="Request a simulated prediction")
    predict.add_argument("--date", required=True)
    predict.add_argument("--time", required=True)
    predict.add_argument("--location", default="Highway 101")
    predict.add_argument("--weather", default="clear")
    predict.add_argument("--temperature", type=float, default=70.0)
    predict.add_argument("--weekend", action="store_true")
    predict.add_argument("--holiday", action="store_true")

    return parser


def _load(dashboard: TrafficDashboard, path: Optional[str]) -> bool:
    if path:
        result = dashboard.load_file(path)
        if result["status"] != "success":
            print(f"✗ {result['message']}")
            return False
        print(f"✓ {result['message']}")
    else:
        count = dashboard.load_sample()
        print(f"✓ Loaded {count} sample records")
    return True


def _print_rows(rows: List[dict], columns: List[str]) -> None:
    widths = {c: max([len(c)] + [len(str(r.get(c, ""))) for r in rows]) for c in columns}
    print("  ".join(c.ljust(widths[c]) for c in columns))
    print("  ".join("-" * widths[c] for c in columns))
    for row in rows:
        print("  ".join(str(row.get(c, "")).ljust(widths[c]) for c in columns))


def _emit(args: argparse.Namespace, payload, columns: Optional[List[str]] = None) -> None:
    if args.json or columns is None:
        print(json.dumps(payload, indent=2, default=str))
    else:
        _print_rows(payload, columns)


def run(args: argparse.Namespace, dashboard: TrafficDashboard) -> int:
    if args.command == "predict":
        request = PredictionRequest(
            date=args.date,
            time=args.time,
            location=args.location,
            weather=args.weather,
            temperature=args.temperature,
            is_weekend=args.weekend,
            is_holiday=args.holiday,
        )
        result = dashboard.predict(request)
        _emit(args, result.to_dict())
        return 0

    if not _load(dashboard, args.file):
        return 1

    if args.command == "summary":
        _emit(args, dashboard.get_summary())

    elif args.command == "analyze":
        dimension = DIMENSIONS[args.dimension]
        rows = dashboard.get_dimension(dimension)
        columns = [dimension.value, "count", "total_volume", "avg_volume", "avg_speed", "avg_occupancy"]
        if dimension is Dimension.LOCATION:
            columns += ["peak_volume", "peak_time"]
        _emit(args, rows, columns)

    elif args.command == "trends":
        _emit(args, {
            "monthly": dashboard.get_monthly_trends(),
            "growth": dashboard.get_growth_metrics(),
            "seasonal": dashboard.get_seasonal_stats(),
        })

    elif args.command == "recent":
        rows = [record.to_dict() for record in dashboard.get_recent_activity()]
        _emit(args, rows, ["timestamp", "location", "volume", "speed", "occupancy", "weather"])

    elif args.command == "train":
        model_config = ModelConfig(
            model_type=args.model_type,
            epochs=args.epochs,
            validation_split=args.validation_split,
        )

        def show_progress(progress) -> None:
            print(f"   → {progress.percent:5.1f}% (epoch {progress.epoch}/{progress.total_epochs})", end="\r")

        metrics = dashboard.train_model(model_config, on_progress=None if args.json else show_progress)
        if not args.json:
            print()
            print(f"✓ Training complete: {metrics.rating}")
        _emit(args, metrics.to_dict())

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    config = get_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    args = build_parser().parse_args(argv)
    dashboard = TrafficDashboard(config)

    try:
        return run(args, dashboard)
    except TrafficDashboardError as e:
        print(f"✗ {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

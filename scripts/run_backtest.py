#!/usr/bin/env python3
"""Run the volatility-triggered put-selling backtest.

Loads SPY price/IV history from the configured CSV files (synthetic data
when they are missing), prints the performance summary and writes the
equity-vs-underlying chart.

Usage:
    python scripts/run_backtest.py
    python scripts/run_backtest.py --synthetic --window 60 --chart plots/run.png
"""

import argparse
import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from volput_app.engine import BacktestEngine
from volput_app.errors import DataQualityError, SystemFailureError
from volput_app.logging import configure_logging
from volput_app.reporting import plot_equity, print_summary


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--config-dir", help="Directory containing backtest.yaml")
    parser.add_argument("--prices", help="CSV of Date,Close")
    parser.add_argument("--iv", help="CSV of Date,IV")
    parser.add_argument("--synthetic", action="store_true", help="Ignore CSV files and use generated data")
    parser.add_argument("--window", type=int, help="Rolling IV window (observations)")
    parser.add_argument("--percentile", type=float, help="IV threshold quantile")
    parser.add_argument("--tenor", type=int, help="Put tenor in trading days")
    parser.add_argument("--cash", type=float, help="Starting cash")
    parser.add_argument("--chart", help="Chart output path")
    parser.add_argument("--no-chart", action="store_true", help="Skip the chart")
    parser.add_argument("--log-level", default="WARNING")
    parser.add_argument("--json-logs", action="store_true")
    return parser.parse_args(argv)


def build_overrides(args: argparse.Namespace) -> dict:
    """Collect command-line values into config section overrides."""
    sections = {
        "signal": {"window": args.window, "percentile": args.percentile},
        "trade": {"tenor_days": args.tenor},
        "ledger": {"starting_cash": args.cash},
        "data_source": {"price_path": args.prices, "iv_path": args.iv},
        "report": {"chart_path": args.chart},
    }
    overrides = {}
    for section, values in sections.items():
        values = {key: value for key, value in values.items() if value is not None}
        if values:
            overrides[section] = values
    return overrides


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(level=args.log_level, format_json=args.json_logs)

    try:
        engine = BacktestEngine(config_dir=args.config_dir, overrides=build_overrides(args))
        observations = engine.load_observations(force_synthetic=args.synthetic)
        result = engine.run(observations)
    except (DataQualityError, SystemFailureError) as e:
        print(f"❌ Backtest failed ({type(e).__name__}): {e}", file=sys.stderr)
        return 1

    print_summary(result)

    if not args.no_chart:
        try:
            path = plot_equity(result, engine.config.report.chart_path, engine.config.report.symbol)
        except (DataQualityError, SystemFailureError) as e:
            print(f"❌ Chart failed ({type(e).__name__}): {e}", file=sys.stderr)
            return 1
        print(f"📈 Chart written to {path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Basic Usage Example - Volput Put-Selling Backtester

This script demonstrates the basic usage of the backtest engine with
synthetic SPY-like data. It shows how to:
- Initialize the engine with default parameters
- Generate a deterministic price/IV history
- Run the signal, trade, ledger and performance stages
- Inspect trades and print the summary

Run: python examples/basic_usage.py
"""

from volput_app.config.defaults import get_default_config
from volput_app.data.loaders import generate_synthetic_series
from volput_app.engine import BacktestEngine
from volput_app.logging import configure_logging
from volput_app.reporting import print_summary


def describe_trades(result) -> None:
    """Print the first few trades of a result."""
    print(f"\n📋 {result.trade_count} puts sold")
    for trade in result.trades[:5]:
        status = "assigned" if trade.assigned else "expired worthless"
        print(f"  {trade.entry_date} → {trade.expiry_date}  strike {trade.strike:8.2f}  "
              f"premium {trade.premium:6.2f}  pnl {trade.pnl:8.2f}  ({status})")
    if result.trade_count > 5:
        print(f"  ... {result.trade_count - 5} more")


def main() -> None:
    configure_logging(level="WARNING")

    print("🚀 Volput basic usage")
    print("=" * 60)

    observations = generate_synthetic_series()
    print(f"📊 {len(observations)} synthetic observations "
          f"({observations[0].date} to {observations[-1].date})")

    engine = BacktestEngine(config=get_default_config())
    result = engine.run(observations)

    triggers = sum(row.triggered for row in result.observations)
    print(f"⚡ {triggers} days with IV above its rolling 80th percentile")

    describe_trades(result)

    peak = max(entry.collateral for entry in result.ledger)
    print(f"\n💰 Peak collateral: {peak:,.2f}")
    print_summary(result)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Parameter Sweep Demo - Volput Put-Selling Backtester

Runs the backtest for several window/percentile/tenor combinations on one
synthetic history. Runs are independent and execute concurrently.

Run: python examples/parameter_sweep_demo.py
"""

import math

from volput_app.data.loaders import generate_synthetic_series
from volput_app.engine import run_parameter_sweep
from volput_app.logging import configure_logging

PARAM_SETS = [
    {"signal": {"window": window, "percentile": pct}, "trade": {"tenor_days": tenor}}
    for window in (60, 100)
    for pct in (0.7, 0.8, 0.9)
    for tenor in (20, 30)
]


def main() -> None:
    configure_logging(level="WARNING")

    print("🧪 Volput parameter sweep")
    print("=" * 60)

    observations = generate_synthetic_series()
    results = run_parameter_sweep(observations, PARAM_SETS, max_workers=4)

    print(f"{'window':>6} {'pct':>5} {'tenor':>5} {'trades':>6} {'return':>9} {'sharpe':>8}")
    for params, result in zip(PARAM_SETS, results):
        window = params["signal"]["window"]
        pct = params["signal"]["percentile"]
        tenor = params["trade"]["tenor_days"]
        if isinstance(result, Exception):
            print(f"{window:>6} {pct:>5.2f} {tenor:>5}   ❌ {type(result).__name__}")
            continue
        sharpe = result.summary.sharpe_ratio
        sharpe_text = "n/a" if math.isnan(sharpe) else f"{sharpe:.2f}"
        print(f"{window:>6} {pct:>5.2f} {tenor:>5} {result.trade_count:>6} "
              f"{result.summary.total_return * 100:>8.2f}% {sharpe_text:>8}")


if __name__ == "__main__":
    main()

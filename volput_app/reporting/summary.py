"""Plain-text performance summary."""

import math
import sys
from typing import Optional, TextIO

import structlog

from ..data.models import BacktestResult, PerformanceSummary

logger = structlog.get_logger(__name__)

UNDEFINED = "undefined"


def _format_ratio(value: float) -> str:
    if math.isnan(value):
        return f"{UNDEFINED:>8}"
    return f"{value:8.2f}"


def format_summary(summary: PerformanceSummary, result: Optional[BacktestResult] = None) -> str:
    """
    Format the summary block.

    Returns and volatility are shown as percentages, the Sharpe ratio as a
    plain ratio or "undefined". Trade counts are appended when the full
    result is given.
    """
    lines = [
        "",
        "Performance Summary",
        "-------------------",
        f"Total Return      : {summary.total_return * 100:8.2f} %",
        f"Annual Volatility : {summary.annualized_volatility * 100:8.2f} %",
        f"Sharpe Ratio      : {_format_ratio(summary.sharpe_ratio)}",
    ]

    if result is not None:
        assigned = sum(trade.assigned for trade in result.trades)
        lines.extend([
            f"Puts Sold         : {result.trade_count:8d}",
            f"Puts Assigned     : {assigned:8d}",
            f"Premium Collected : {result.total_premium:8.2f}",
            f"Net Option P&L    : {result.total_pnl:8.2f}",
        ])

    lines.append("")
    return "\n".join(lines)


def print_summary(result: BacktestResult, stream: TextIO = sys.stdout) -> None:
    """Print the summary of a completed backtest."""
    print(format_summary(result.summary, result), file=stream, flush=True)
    logger.debug("Summary printed", trades=result.trade_count)

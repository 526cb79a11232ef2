"""
Report output for completed backtests.

Human-readable performance summary and the equity-vs-underlying chart.
"""

from .chart import plot_equity
from .summary import format_summary, print_summary

__all__ = ["format_summary", "plot_equity", "print_summary"]

"""
Volatility signal module.

Rolling implied-volatility percentile thresholds and the sell trigger that
fires when the current IV rises above them.
"""

from .iv_percentile import attach_signals, compute_signal

__all__ = ["attach_signals", "compute_signal"]

"""
Volput App - Volatility-Triggered Cash-Secured Put Backtester

Backtests a strategy that sells 30-trading-day at-the-money puts whenever
implied volatility rises above its rolling 80th percentile, and tracks the
cash/collateral account that results against simply holding the underlying.
"""

__version__ = "0.1.0"
__author__ = "Volput Team"

"""Performance statistics for equity curves"""

from .performance import daily_returns, summarize

__all__ = [
    "daily_returns",
    "summarize",
]

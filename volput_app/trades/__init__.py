"""Trade generation from the volatility signal."""

from .simulator import generate_trades

__all__ = ["generate_trades"]

"""Option valuation."""

from .black_scholes import put_d1_d2, put_price

__all__ = ["put_d1_d2", "put_price"]

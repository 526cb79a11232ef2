"""
Black-Scholes valuation of European puts.

Zero risk-free rate and zero dividend yield throughout. The supported input
range is volatility in [0.01, 2] and time to expiry in [1/252, 2] years.
Far outside it, and in particular as volatility approaches zero, the two
terms of the put formula become nearly equal and their difference loses
precision; such inputs are out of scope.
"""

import math
import numbers

from scipy.stats import norm

from ..errors import InvalidInputError

N = norm.cdf


def _require_positive(name: str, value: float) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real) \
            or not math.isfinite(value) or value <= 0:
        raise InvalidInputError(f"{name} must be a positive finite number, got {value!r}",
                                parameter=name, value=value)


def put_d1_d2(spot: float, strike: float, volatility: float,
              time_to_expiry_years: float) -> tuple[float, float]:
    """
    Black-Scholes d1 and d2 with r = q = 0.

    d1 = (ln(S/K) + 0.5 * sigma^2 * T) / (sigma * sqrt(T))
    d2 = d1 - sigma * sqrt(T)
    """
    _require_positive("spot", spot)
    _require_positive("strike", strike)
    _require_positive("volatility", volatility)
    _require_positive("time_to_expiry_years", time_to_expiry_years)

    sigma_sqrt_t = volatility * math.sqrt(time_to_expiry_years)
    d1 = (math.log(spot / strike) + 0.5 * volatility ** 2 * time_to_expiry_years) / sigma_sqrt_t
    return d1, d1 - sigma_sqrt_t


def put_price(spot: float, strike: float, volatility: float,
              time_to_expiry_years: float) -> float:
    """
    Value a European put.

    price = K * N(-d2) - S * N(-d1)

    Args:
        spot: Underlying price
        strike: Strike price
        volatility: Annualized volatility as a fraction
        time_to_expiry_years: Time to expiry in years

    Returns:
        Non-negative put value

    Raises:
        InvalidInputError: If any argument is not a positive finite number
    """
    d1, d2 = put_d1_d2(spot, strike, volatility, time_to_expiry_years)
    price = strike * float(N(-d2)) - spot * float(N(-d1))
    # Rounding can leave a deep out-of-the-money put a hair below zero
    return max(price, 0.0)

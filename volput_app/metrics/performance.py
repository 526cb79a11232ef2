"""Total return, annualized volatility and Sharpe ratio of a ledger"""

import math
from collections.abc import Sequence

import numpy as np

from ..data.models import LedgerEntry, PerformanceSummary
from ..errors import InsufficientDataError

# Relative to the mean return; below this the deviation is rounding noise.
ZERO_STDEV_TOLERANCE = 1e-12


def daily_returns(ledger: Sequence[LedgerEntry]) -> np.ndarray:
    """
    Calculate simple returns between consecutive ledger entries

    r[k] = equity[k] / equity[k-1] - 1 for k = 1..n-1

    Raises:
        InsufficientDataError: If fewer than two entries, or any equity used
            as a denominator is not positive
    """
    if len(ledger) < 2:
        raise InsufficientDataError(
            "At least two ledger entries are needed for returns",
            required_count=2,
            available_count=len(ledger),
        )

    equity = np.array([entry.equity for entry in ledger], dtype=float)
    if np.any(equity[:-1] <= 0):
        index = int(np.argmax(equity[:-1] <= 0))
        raise InsufficientDataError(
            f"Equity must stay positive to compute returns, got {equity[index]} "
            f"on {ledger[index].date}",
            context={"index": index, "equity": float(equity[index])},
        )

    return equity[1:] / equity[:-1] - 1.0


def summarize(ledger: Sequence[LedgerEntry], periods_per_year: int = 252) -> PerformanceSummary:
    """
    Calculate headline statistics of a ledger's equity curve

    Volatility uses the sample standard deviation of daily returns. The
    Sharpe ratio (zero risk-free rate) is NaN when that deviation is zero.
    A single return, or a deviation within ZERO_STDEV_TOLERANCE of the mean
    return, counts as zero.

    Args:
        ledger: Daily ledger entries
        periods_per_year: Annualization factor

    Returns:
        PerformanceSummary
    """
    returns = daily_returns(ledger)

    total_return = ledger[-1].equity / ledger[0].equity - 1.0
    mean = float(np.mean(returns))
    stdev = float(np.std(returns, ddof=1)) if len(returns) > 1 else 0.0
    annualization = math.sqrt(periods_per_year)

    if stdev <= ZERO_STDEV_TOLERANCE * abs(mean):
        stdev = 0.0
        sharpe = math.nan
    else:
        sharpe = mean / stdev * annualization

    return PerformanceSummary(
        total_return=total_return,
        annualized_volatility=stdev * annualization,
        sharpe_ratio=sharpe,
    )

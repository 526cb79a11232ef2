"""
Put-selling trade simulator.

Walks the signalled observation series and sells one at-the-money put on
every triggered day that has a full tenor of trading days ahead of it.

Positions are allowed to overlap: a trigger while earlier puts are still
open opens another put regardless. This is the strategy's rule (respond to
every signal), not an oversight, and it means collateral can reach several
times the underlying price during volatile stretches.
"""

import numbers
from collections.abc import Sequence
from typing import Optional, Union

import structlog

from ..data.models import MarketObservation, SignalledObservation, SignalRecord, Trade
from ..errors import InvalidInputError
from ..pricing import put_price
from ..signals import attach_signals
from ..utils.dates import trading_days_to_years

logger = structlog.get_logger(__name__)


def settle_put(strike: float, premium: float, exit_price: float) -> float:
    """Net result of a short put held to expiry: premium less intrinsic value."""
    return premium - max(0.0, strike - exit_price)


def generate_trades(
    observations: Union[Sequence[SignalledObservation], Sequence[MarketObservation]],
    signals: Optional[Sequence[SignalRecord]] = None,
    tenor_days: int = 30,
    trading_days_per_year: int = 252,
) -> list[Trade]:
    """
    Build one Trade per triggered observation that has an expiry row.

    The expiry row is the observation exactly tenor_days rows later, so
    tenor counts trading days present in the series, not calendar days.

    Args:
        observations: Signalled observations, or plain observations when
            signals is given alongside them
        signals: Signal records aligned 1:1 with plain observations
        tenor_days: Trading-day rows from entry to expiry
        trading_days_per_year: Converts tenor_days to a year fraction

    Returns:
        Trades in entry order (empty if nothing qualifies)

    Raises:
        InvalidInputError: If tenor_days or trading_days_per_year is not positive
        MisalignedSeriesError: If signals and observations differ in length
    """
    for name, value in (("tenor_days", tenor_days), ("trading_days_per_year", trading_days_per_year)):
        if not isinstance(value, numbers.Integral) or isinstance(value, bool) or value <= 0:
            raise InvalidInputError(f"{name} must be a positive integer, got {value!r}",
                                    parameter=name, value=value)
    tenor_days, trading_days_per_year = int(tenor_days), int(trading_days_per_year)

    if signals is not None:
        rows = attach_signals(observations, signals)
    else:
        rows = list(observations)
        if rows and not isinstance(rows[0], SignalledObservation):
            raise InvalidInputError(
                "signals are required when observations carry no signal",
                parameter="signals",
            )

    time_to_expiry = trading_days_to_years(tenor_days, trading_days_per_year)
    trades = []
    skipped = 0

    for i, row in enumerate(rows):
        if not row.triggered:
            continue
        if i + tenor_days >= len(rows):
            skipped += 1
            continue

        expiry = rows[i + tenor_days]
        strike = row.close
        premium = put_price(strike, strike, row.iv, time_to_expiry)
        trade = Trade(
            entry_date=row.date,
            expiry_date=expiry.date,
            strike=strike,
            premium=premium,
            exit_price=expiry.close,
            pnl=settle_put(strike, premium, expiry.close),
        )
        trades.append(trade)

        logger.debug(
            "Put sold",
            entry_date=trade.entry_date.isoformat(),
            expiry_date=trade.expiry_date.isoformat(),
            strike=trade.strike,
            iv=row.iv,
            premium=trade.premium,
            pnl=trade.pnl,
        )

    logger.info(
        "Trades generated",
        trades=len(trades),
        skipped_without_expiry=skipped,
        tenor_days=tenor_days,
    )
    return trades

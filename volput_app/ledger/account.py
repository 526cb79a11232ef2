"""
Cash-secured put account ledger.

Replays a trade list one calendar day at a time. Opening a put posts its
strike as collateral and credits the premium. Expiry releases the
collateral and credits it back to cash net of any assignment loss, that is
min(strike, exit_price). Equity therefore only moves by premium income and
settlement losses, and a full open/expire cycle changes it by exactly the
trade's pnl.
"""

import math
import numbers
from collections import defaultdict
from collections.abc import Sequence
from datetime import date

from ..data.models import LedgerEntry, Trade
from ..errors import EmptyInputError, InvalidInputError
from ..logging.config import get_ledger_logger, log_trade_event
from ..utils.dates import calendar_days


class AccountLedger:
    """
    Running cash and collateral balances for one replay.

    Balances live on the instance and are reset at the start of every
    replay. Collateral is recomputed from the open strikes rather than
    accumulated, so it is exactly 0.0 once every position has expired.
    """

    def __init__(self, starting_cash: float = 100000.0):
        if isinstance(starting_cash, bool) or not isinstance(starting_cash, numbers.Real) \
                or not math.isfinite(starting_cash) or starting_cash <= 0:
            raise InvalidInputError(f"starting_cash must be positive, got {starting_cash!r}",
                                    parameter="starting_cash", value=starting_cash)
        self.logger = get_ledger_logger(__name__)
        self.starting_cash = float(starting_cash)
        self.reset()

    def reset(self) -> None:
        """Return to starting cash with no open positions."""
        self.cash = self.starting_cash
        self.collateral = 0.0
        self.open_strikes: list[float] = []

    @property
    def equity(self) -> float:
        return self.cash + self.collateral

    def open_trade(self, trade: Trade, day: date) -> None:
        """Post collateral and collect the premium."""
        self.cash -= trade.strike
        self.cash += trade.premium
        self.open_strikes.append(trade.strike)
        self.collateral = math.fsum(self.open_strikes)
        log_trade_event(self.logger, "open", day, trade.strike, self.cash, self.collateral,
                        context={"premium": trade.premium})

    def expire_trade(self, trade: Trade, day: date) -> None:
        """Release collateral and credit it back less the assignment loss."""
        self.open_strikes.remove(trade.strike)
        self.collateral = math.fsum(self.open_strikes)
        self.cash += trade.strike - max(0.0, trade.strike - trade.exit_price)
        log_trade_event(self.logger, "expire", day, trade.strike, self.cash, self.collateral,
                        context={"exit_price": trade.exit_price, "pnl": trade.pnl})

    def snapshot(self, day: date) -> LedgerEntry:
        return LedgerEntry(date=day, cash=self.cash, collateral=self.collateral,
                           equity=self.cash + self.collateral)

    def replay(self, trades: Sequence[Trade]) -> list[LedgerEntry]:
        """
        Replay trades into one LedgerEntry per calendar day.

        The range runs from the earliest entry to the latest expiry, weekends
        included. On each day all openings are applied, then all expiries,
        then the snapshot is taken.

        Raises:
            EmptyInputError: If trades is empty
        """
        if not trades:
            raise EmptyInputError("Cannot build a ledger from zero trades",
                                  data_type="trades")
        self.reset()

        by_entry: dict[date, list[Trade]] = defaultdict(list)
        by_expiry: dict[date, list[Trade]] = defaultdict(list)
        for trade in trades:
            by_entry[trade.entry_date].append(trade)
            by_expiry[trade.expiry_date].append(trade)

        start = min(trade.entry_date for trade in trades)
        end = max(trade.expiry_date for trade in trades)

        entries = []
        for day in calendar_days(start, end):
            for trade in by_entry.get(day, ()):
                self.open_trade(trade, day)
            for trade in by_expiry.get(day, ()):
                self.expire_trade(trade, day)
            entries.append(self.snapshot(day))

        self.logger.info(
            "Ledger built",
            days=len(entries),
            trades=len(trades),
            start=start.isoformat(),
            end=end.isoformat(),
            final_equity=entries[-1].equity,
            peak_collateral=max(entry.collateral for entry in entries),
        )
        return entries


def build_ledger(trades: Sequence[Trade], starting_cash: float = 100000.0) -> list[LedgerEntry]:
    """Replay trades into a daily cash/collateral/equity series."""
    return AccountLedger(starting_cash).replay(trades)

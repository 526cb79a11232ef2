"""
Canonical data models for the backtesting pipeline.

This module defines immutable records that flow between the pipeline
stages: market observations in, signals and trades in the middle, ledger
entries and the performance summary out.
"""

import math
from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class MarketObservation:
    """One trading day of the underlying."""
    date: date          # Trading day
    close: float        # Closing price, positive
    iv: float           # Implied volatility as a fraction, in (0, 1]


@dataclass(frozen=True)
class SignalRecord:
    """Rolling IV threshold and sell trigger for one observation."""
    threshold: Optional[float] = None   # None until the window is full
    triggered: bool = False


@dataclass(frozen=True)
class SignalledObservation:
    """An observation with its signal attached, so the two can never drift apart."""
    observation: MarketObservation
    signal: SignalRecord

    @property
    def date(self) -> date:
        return self.observation.date

    @property
    def close(self) -> float:
        return self.observation.close

    @property
    def iv(self) -> float:
        return self.observation.iv

    @property
    def triggered(self) -> bool:
        return self.signal.triggered


@dataclass(frozen=True)
class Trade:
    """A cash-secured ATM put sold at entry and settled at expiry."""
    entry_date: date
    expiry_date: date
    strike: float       # Equal to the close on entry_date
    premium: float      # Black-Scholes value collected at entry
    exit_price: float   # Underlying close on expiry_date
    pnl: float          # premium - max(0, strike - exit_price)

    @property
    def entry_price(self) -> float:
        """Underlying price at entry; identical to the strike for an ATM put."""
        return self.strike

    @property
    def assigned(self) -> bool:
        """True if the put finished in the money."""
        return self.exit_price < self.strike


@dataclass(frozen=True)
class LedgerEntry:
    """End-of-day snapshot of the account."""
    date: date
    cash: float
    collateral: float   # Sum of strikes of open trades
    equity: float       # cash + collateral


@dataclass(frozen=True)
class PerformanceSummary:
    """Headline statistics of an equity curve."""
    total_return: float
    annualized_volatility: float
    sharpe_ratio: float     # NaN when return volatility is zero

    @property
    def sharpe_defined(self) -> bool:
        return not math.isnan(self.sharpe_ratio)


@dataclass(frozen=True)
class RebasedPrice:
    """Underlying close scaled to start at the strategy's first equity value."""
    date: date
    close: float
    rebased: float


@dataclass(frozen=True)
class BacktestResult:
    """Everything a completed backtest run produces."""
    observations: list[SignalledObservation]
    trades: list[Trade]
    ledger: list[LedgerEntry]
    summary: PerformanceSummary
    rebased_prices: list[RebasedPrice]

    @property
    def trade_count(self) -> int:
        return len(self.trades)

    @property
    def total_premium(self) -> float:
        return sum(trade.premium for trade in self.trades)

    @property
    def total_pnl(self) -> float:
        return sum(trade.pnl for trade in self.trades)

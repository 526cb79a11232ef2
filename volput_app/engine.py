"""
Main backtest engine coordinator.

Orchestrates the put-selling backtest pipeline, coordinating data loading,
signal computation, trade generation, ledger replay and performance
statistics.
"""

import copy
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Optional, Union

import structlog

from .config.defaults import BacktestConfig, get_default_config
from .config.loader import ConfigLoader
from .data.loaders import load_market_data
from .data.models import BacktestResult, LedgerEntry, MarketObservation, RebasedPrice
from .data.validators import validate_observations
from .errors import DataQualityError, InsufficientDataError, SystemFailureError
from .ledger import build_ledger
from .metrics import summarize
from .signals import attach_signals, compute_signal
from .trades import generate_trades

logger = structlog.get_logger(__name__)


def rebase_prices(
    ledger: Sequence[LedgerEntry],
    observations: Sequence[MarketObservation],
) -> list[RebasedPrice]:
    """
    Scale the underlying's closes to start at the ledger's equity.

    Only dates present in both the ledger and the observations are kept.
    The first shared date's close is mapped to that date's equity, so the
    two curves can be drawn on one axis.

    Raises:
        InsufficientDataError: If the ledger and observations share no dates
    """
    equity_by_date = {entry.date: entry.equity for entry in ledger}
    shared = [obs for obs in observations if obs.date in equity_by_date]
    if not shared:
        raise InsufficientDataError(
            "Ledger and price series have no dates in common",
            required_count=1,
            available_count=0,
        )

    base_close = shared[0].close
    base_equity = equity_by_date[shared[0].date]
    return [
        RebasedPrice(date=obs.date, close=obs.close,
                     rebased=obs.close / base_close * base_equity)
        for obs in shared
    ]


class BacktestEngine:
    """
    Main coordinator for the volatility-triggered put-selling backtest.

    Manages the pipeline:
    Price/IV History → Signal → Trades → Ledger → Performance Summary
    """

    def __init__(
        self,
        config: Optional[BacktestConfig] = None,
        config_dir: Optional[Union[str, Path]] = None,
        overrides: Optional[dict[str, Any]] = None,
    ) -> None:
        """Initialize the engine from a ready config or from the config directory."""
        self.logger = logger

        if config is None:
            loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
            config = loader.load(overrides)
        elif overrides:
            config = ConfigLoader.apply_overrides(config, overrides)

        self.config = config
        self.logger.info(
            "Backtest engine initialized",
            window=config.signal.window,
            percentile=config.signal.percentile,
            tenor_days=config.trade.tenor_days,
            starting_cash=config.ledger.starting_cash,
        )

    def load_observations(self, force_synthetic: bool = False) -> list[MarketObservation]:
        """Load history from the configured CSV files or the synthetic generator."""
        return load_market_data(self.config.data_source, self.config.synthetic,
                                force_synthetic=force_synthetic)

    def run(self, observations: Optional[Sequence[MarketObservation]] = None) -> BacktestResult:
        """
        Run the full pipeline over one price/IV history.

        Args:
            observations: History to backtest; loaded from the configured
                source when omitted

        Returns:
            BacktestResult with trades, ledger, summary and rebased prices

        Raises:
            DataQualityError: Bad history, no trades, or too short a ledger
            SystemFailureError: Invalid parameters
        """
        config = self.config

        try:
            if observations is None:
                observations = self.load_observations()
            else:
                observations = validate_observations(observations)

            signals = compute_signal(observations, window=config.signal.window,
                                     percentile=config.signal.percentile)
            rows = attach_signals(observations, signals)
            trades = generate_trades(rows, tenor_days=config.trade.tenor_days,
                                     trading_days_per_year=config.trade.trading_days_per_year)
            ledger = build_ledger(trades, starting_cash=config.ledger.starting_cash)
            summary = summarize(ledger, periods_per_year=config.performance.periods_per_year)
            rebased = rebase_prices(ledger, observations)

        except (DataQualityError, SystemFailureError) as e:
            self.logger.error(
                "Backtest failed",
                error_type=type(e).__name__,
                error=str(e),
                context=getattr(e, "context", {}),
                recoverable=e.recoverable,
            )
            raise

        self.logger.info(
            "Backtest completed",
            observations=len(observations),
            trades=len(trades),
            ledger_days=len(ledger),
            total_return=summary.total_return,
            annualized_volatility=summary.annualized_volatility,
            sharpe_ratio=summary.sharpe_ratio,
        )

        return BacktestResult(
            observations=rows,
            trades=trades,
            ledger=ledger,
            summary=summary,
            rebased_prices=rebased,
        )


def run_parameter_sweep(
    observations: Sequence[MarketObservation],
    param_sets: Sequence[dict[str, Any]],
    base_config: Optional[BacktestConfig] = None,
    max_workers: Optional[int] = None,
) -> list[Union[BacktestResult, Exception]]:
    """
    Run independent backtests for several parameter combinations.

    Each entry of param_sets maps section names to field overrides, e.g.
    {"signal": {"window": 60}, "trade": {"tenor_days": 20}}. Runs execute in
    a thread pool, each on its own copy of the observations. A run that
    fails yields its exception in place of a result so one bad combination
    does not discard the others.

    Returns:
        Results (or exceptions) in the order of param_sets
    """
    base_config = base_config or get_default_config()
    history = validate_observations(observations)

    def _run(params: dict[str, Any]) -> Union[BacktestResult, Exception]:
        try:
            config = ConfigLoader.apply_overrides(base_config, params)
            return BacktestEngine(config=config).run(copy.deepcopy(history))
        except (DataQualityError, SystemFailureError) as e:
            return e

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        results = list(executor.map(_run, param_sets))

    logger.info(
        "Parameter sweep completed",
        runs=len(results),
        failed=sum(isinstance(r, Exception) for r in results),
    )
    return results


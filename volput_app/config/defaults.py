"""Default configuration parameters for the put-selling backtest."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class SignalParams:
    """Rolling IV percentile trigger parameters."""
    window: int = 100                    # Observations in the rolling window
    percentile: float = 0.80             # Quantile used as the sell threshold


@dataclass(frozen=True)
class TradeParams:
    """Option trade construction parameters."""
    tenor_days: int = 30                 # Trading-day rows until expiry
    trading_days_per_year: int = 252     # Converts tenor to year fraction


@dataclass(frozen=True)
class LedgerParams:
    """Account replay parameters."""
    starting_cash: float = 100000.0


@dataclass(frozen=True)
class PerformanceParams:
    """Summary statistics parameters."""
    periods_per_year: int = 252          # Annualization factor for daily returns


@dataclass(frozen=True)
class DataSourceParams:
    """Tabular price/IV source parameters."""
    price_path: str = "spy_prices.csv"
    iv_path: str = "spy_iv.csv"
    date_column: str = "Date"
    close_column: str = "Close"
    iv_column: str = "IV"
    inner_join: bool = False             # Drop unmatched dates instead of failing


@dataclass(frozen=True)
class SyntheticParams:
    """Deterministic random-walk generator parameters."""
    seed: int = 42
    start: date = date(2024, 1, 2)
    end: date = date(2024, 12, 31)
    initial_price: float = 450.0
    drift: float = 0.1                   # Per-day mean price step
    step_std: float = 1.5                # Per-day price step deviation
    iv_mean: float = 0.20
    iv_std: float = 0.04
    iv_floor: float = 0.05
    iv_cap: float = 0.60


@dataclass(frozen=True)
class ReportParams:
    """Summary and chart output parameters."""
    symbol: str = "SPY"
    chart_path: str = "plots/equity_vs_spy.png"


@dataclass(frozen=True)
class BacktestConfig:
    """Complete backtest configuration."""
    signal: SignalParams
    trade: TradeParams
    ledger: LedgerParams
    performance: PerformanceParams
    data_source: DataSourceParams
    synthetic: SyntheticParams
    report: ReportParams


def get_default_config() -> BacktestConfig:
    """Get the default configuration instance."""
    return BacktestConfig(
        signal=SignalParams(),
        trade=TradeParams(),
        ledger=LedgerParams(),
        performance=PerformanceParams(),
        data_source=DataSourceParams(),
        synthetic=SyntheticParams(),
        report=ReportParams(),
    )

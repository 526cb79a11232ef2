"""Equity curve vs. rebased underlying chart."""

from pathlib import Path
from typing import Union

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import structlog

from ..data.models import BacktestResult
from ..errors import InsufficientDataError, ReportingError

logger = structlog.get_logger(__name__)


def plot_equity(result: BacktestResult, path: Union[str, Path], symbol: str = "SPY") -> Path:
    """
    Draw the strategy's equity next to the underlying rebased to the same start.

    Both lines use only the dates present in both series.

    Args:
        result: Completed backtest
        path: PNG destination; parent directories are created
        symbol: Underlying name for the legend

    Returns:
        The path written

    Raises:
        InsufficientDataError: If there is nothing to draw
        ReportingError: If the image cannot be written
    """
    rebased = result.rebased_prices
    if not rebased:
        raise InsufficientDataError("No shared dates between ledger and prices to plot",
                                    required_count=1, available_count=0)

    equity_by_date = {entry.date: entry.equity for entry in result.ledger}
    dates = [point.date for point in rebased]

    out_path = Path(path)
    fig, ax = plt.subplots(figsize=(10, 6))
    try:
        ax.plot(dates, [equity_by_date[d] for d in dates], lw=2, label="Strategy Equity")
        ax.plot(dates, [point.rebased for point in rebased], lw=2, label=f"{symbol} Rebased")
        ax.set_xlabel("Date")
        ax.set_ylabel("Equity ($)")
        ax.set_title(f"Equity Curve vs. {symbol}")
        ax.legend()
        fig.autofmt_xdate()

        out_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(out_path, dpi=150, bbox_inches="tight")
    except OSError as e:
        raise ReportingError(f"Cannot write chart to {out_path}: {e}",
                             operation="savefig", target=str(out_path)) from e
    finally:
        plt.close(fig)

    logger.info("Equity chart written", path=str(out_path), points=len(dates))
    return out_path

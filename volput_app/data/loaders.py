"""
Price/IV history providers.

Two sources are supported behind the same MarketObservation interface: a
pair of CSV files keyed by date (closing prices and implied volatility) and
a seeded random-walk generator used when no files are available.
"""

from pathlib import Path
from typing import Optional, Union

import numpy as np
import pandas as pd
import structlog

from ..config.defaults import DataSourceParams, SyntheticParams
from ..errors import MalformedDataError, MisalignedSeriesError
from .models import MarketObservation
from .validators import validate_observations

logger = structlog.get_logger(__name__)

PathLike = Union[str, Path]


def _read_column_frame(path: PathLike, date_column: str, value_column: str) -> pd.DataFrame:
    """Read one CSV file and return a two-column frame of dates and floats."""
    try:
        frame = pd.read_csv(path, float_precision="round_trip")
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise MalformedDataError(f"Cannot read {path}: {e}", field=str(path)) from e

    missing = [col for col in (date_column, value_column) if col not in frame.columns]
    if missing:
        raise MalformedDataError(
            f"{path} is missing columns {missing}",
            field=missing[0],
            context={"path": str(path), "columns": list(frame.columns)},
        )

    try:
        dates = pd.to_datetime(frame[date_column]).dt.date
        values = pd.to_numeric(frame[value_column]).astype(float)
    except (ValueError, TypeError) as e:
        raise MalformedDataError(
            f"{path} has unparseable values: {e}",
            field=value_column,
            context={"path": str(path)},
        ) from e

    return pd.DataFrame({"date": dates, value_column: values})


def load_csv_series(
    price_path: PathLike,
    iv_path: PathLike,
    params: Optional[DataSourceParams] = None,
) -> list[MarketObservation]:
    """
    Load and align closing prices and implied volatility from two CSV files.

    Args:
        price_path: CSV with a date column and a closing price column
        iv_path: CSV with a date column and an implied volatility column
        params: Column names and join policy

    Returns:
        Validated observations in file order

    Raises:
        MalformedDataError: If a file is unreadable or has bad columns/values
        MisalignedSeriesError: If the two files disagree on dates (unless
            inner_join is enabled) or dates are not strictly increasing
    """
    params = params or DataSourceParams()

    prices = _read_column_frame(price_path, params.date_column, params.close_column)
    ivs = _read_column_frame(iv_path, params.date_column, params.iv_column)

    if params.inner_join:
        merged = prices.merge(ivs, on="date", how="inner")
        dropped = len(prices) + len(ivs) - 2 * len(merged)
        if dropped:
            logger.warning(
                "Dropped unmatched dates while joining price and IV series",
                dropped=dropped,
                price_rows=len(prices),
                iv_rows=len(ivs),
            )
    else:
        price_dates = list(prices["date"])
        iv_dates = list(ivs["date"])
        if price_dates != iv_dates:
            index = next(
                (i for i, (p, v) in enumerate(zip(price_dates, iv_dates)) if p != v),
                min(len(price_dates), len(iv_dates)),
            )
            raise MisalignedSeriesError(
                f"Price and IV series disagree on dates at row {index}",
                index=index,
                date=price_dates[index] if index < len(price_dates) else None,
                context={
                    "price_rows": len(price_dates),
                    "iv_rows": len(iv_dates),
                    "iv_date": iv_dates[index].isoformat() if index < len(iv_dates) else None,
                },
            )
        merged = prices.assign(**{params.iv_column: ivs[params.iv_column].to_numpy()})

    observations = [
        MarketObservation(date=row.date, close=float(row.close), iv=float(row.iv))
        for row in merged.rename(columns={
            params.close_column: "close",
            params.iv_column: "iv",
        }).itertuples(index=False)
    ]

    logger.info("Loaded price/IV history from CSV", rows=len(observations),
                price_path=str(price_path), iv_path=str(iv_path))
    return validate_observations(observations)


def generate_synthetic_series(params: Optional[SyntheticParams] = None) -> list[MarketObservation]:
    """
    Generate a deterministic price/IV history on weekday dates.

    Price is a drifted Gaussian random walk starting near initial_price; IV is
    Gaussian noise around iv_mean clamped to [iv_floor, iv_cap]. The same seed
    always yields the same series.
    """
    params = params or SyntheticParams()

    rng = np.random.default_rng(params.seed)
    dates = pd.bdate_range(params.start, params.end)
    n = len(dates)

    close = np.cumsum(rng.standard_normal(n) * params.step_std + params.drift) + params.initial_price
    iv = np.clip(rng.standard_normal(n) * params.iv_std + params.iv_mean,
                 params.iv_floor, params.iv_cap)

    observations = [
        MarketObservation(date=day.date(), close=float(c), iv=float(v))
        for day, c, v in zip(dates, close, iv)
    ]

    logger.info("Generated synthetic price/IV history", rows=n, seed=params.seed)
    return validate_observations(observations)


def load_market_data(
    source: Optional[DataSourceParams] = None,
    synthetic: Optional[SyntheticParams] = None,
    force_synthetic: bool = False,
) -> list[MarketObservation]:
    """
    Load history from CSV when both files exist, otherwise synthesize it.

    Args:
        source: CSV source parameters
        synthetic: Generator parameters used as the fallback
        force_synthetic: Skip the CSV lookup entirely
    """
    source = source or DataSourceParams()

    if not force_synthetic and Path(source.price_path).is_file() and Path(source.iv_path).is_file():
        return load_csv_series(source.price_path, source.iv_path, source)

    if not force_synthetic:
        logger.info("CSV history not found, using synthetic data",
                    price_path=source.price_path, iv_path=source.iv_path)
    return generate_synthetic_series(synthetic)

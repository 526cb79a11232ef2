"""Rolling IV percentile threshold and sell trigger"""

import numbers
from collections.abc import Sequence

import numpy as np
import structlog
from numpy.lib.stride_tricks import sliding_window_view

from ..data.models import MarketObservation, SignalledObservation, SignalRecord
from ..errors import InvalidInputError, MisalignedSeriesError

logger = structlog.get_logger(__name__)


def compute_signal(
    observations: Sequence[MarketObservation],
    window: int = 100,
    percentile: float = 0.80,
) -> list[SignalRecord]:
    """
    Calculate the rolling IV threshold and trigger for every observation

    threshold[i] = quantile(iv[i-window+1 .. i], percentile), using linear
    interpolation between order statistics. triggered[i] = iv[i] > threshold[i].
    Observations before the window is full get no threshold and never trigger.

    Args:
        observations: Series in trading-day order
        window: Number of observations in the rolling window, current one included
        percentile: Quantile of the window used as the threshold

    Returns:
        One SignalRecord per observation, same order

    Raises:
        InvalidInputError: If window is not a positive integer or percentile
            is not strictly between 0 and 1
    """
    if not isinstance(window, numbers.Integral) or isinstance(window, bool) or window <= 0:
        raise InvalidInputError(f"window must be a positive integer, got {window!r}",
                                parameter="window", value=window)
    window = int(window)
    if not 0 < percentile < 1:
        raise InvalidInputError(f"percentile must be in (0, 1), got {percentile!r}",
                                parameter="percentile", value=percentile)

    n = len(observations)
    if n < window:
        logger.info("Series shorter than signal window, no signals possible",
                    observations=n, window=window)
        return [SignalRecord() for _ in range(n)]

    iv = np.fromiter((obs.iv for obs in observations), dtype=float, count=n)
    thresholds = np.quantile(sliding_window_view(iv, window), percentile,
                             axis=1, method="linear")

    records = [SignalRecord() for _ in range(window - 1)]
    for current, threshold in zip(iv[window - 1:], thresholds):
        records.append(SignalRecord(threshold=float(threshold),
                                    triggered=bool(current > threshold)))

    logger.info(
        "IV signal computed",
        observations=n,
        window=window,
        percentile=percentile,
        triggers=sum(record.triggered for record in records),
    )
    return records


def attach_signals(
    observations: Sequence[MarketObservation],
    signals: Sequence[SignalRecord],
) -> list[SignalledObservation]:
    """
    Pair each observation with its signal record.

    Raises:
        MisalignedSeriesError: If the two sequences differ in length
    """
    if len(observations) != len(signals):
        raise MisalignedSeriesError(
            f"Got {len(signals)} signal records for {len(observations)} observations",
            context={"observations": len(observations), "signals": len(signals)},
        )

    return [SignalledObservation(observation=obs, signal=sig)
            for obs, sig in zip(observations, signals)]

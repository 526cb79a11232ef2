"""
Ingestion validation for price/IV history.

Every data provider passes its output through validate_observations so that
the pipeline stages can rely on ordered, positive, in-range observations.
"""

import math
import numbers
from collections.abc import Sequence

import structlog

from ..errors import MalformedDataError, MisalignedSeriesError
from .models import MarketObservation

logger = structlog.get_logger(__name__)


def validate_observation(observation: MarketObservation, index: int) -> None:
    """
    Validate a single observation's values.

    Raises:
        MalformedDataError: If close is not positive or IV is outside (0, 1]
    """
    close = observation.close
    if isinstance(close, bool) or not isinstance(close, numbers.Real) \
            or not math.isfinite(close) or close <= 0:
        raise MalformedDataError(
            f"Close on {observation.date} must be a positive number, got {close!r}",
            field="close",
            value=close,
            context={"index": index, "date": observation.date.isoformat()},
        )

    iv = observation.iv
    if isinstance(iv, bool) or not isinstance(iv, numbers.Real) \
            or not math.isfinite(iv) or iv <= 0 or iv > 1:
        raise MalformedDataError(
            f"IV on {observation.date} must be in (0, 1], got {iv!r}",
            field="iv",
            value=iv,
            context={"index": index, "date": observation.date.isoformat()},
        )


def validate_observations(observations: Sequence[MarketObservation]) -> list[MarketObservation]:
    """
    Validate an observation series and return it as a list.

    Args:
        observations: Series in trading-day order

    Returns:
        The observations as a new list

    Raises:
        MisalignedSeriesError: If dates are not strictly increasing
        MalformedDataError: If any close or IV is out of range
    """
    validated = list(observations)

    previous = None
    for index, observation in enumerate(validated):
        if previous is not None and observation.date <= previous.date:
            raise MisalignedSeriesError(
                f"Dates must be strictly increasing: {observation.date} follows {previous.date}",
                index=index,
                date=observation.date,
                previous_date=previous.date,
            )
        validate_observation(observation, index)
        previous = observation

    logger.debug(
        "Observations validated",
        count=len(validated),
        first=validated[0].date.isoformat() if validated else None,
        last=validated[-1].date.isoformat() if validated else None,
    )
    return validated

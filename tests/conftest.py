"""Pytest configuration and shared fixtures."""

from datetime import date, timedelta

import pytest

from volput_app.data.models import MarketObservation, Trade


def make_observations(closes, ivs, start=date(2024, 1, 1)):
    """Build observations on consecutive calendar days."""
    return [
        MarketObservation(date=start + timedelta(days=i), close=float(c), iv=float(v))
        for i, (c, v) in enumerate(zip(closes, ivs))
    ]


@pytest.fixture
def observation_factory():
    """Factory for observation series on consecutive days."""
    return make_observations


@pytest.fixture
def sample_trade() -> Trade:
    """A put sold at 450 for 5.00 that expires with the underlying at 440."""
    return Trade(
        entry_date=date(2024, 3, 1),
        expiry_date=date(2024, 4, 12),
        strike=450.0,
        premium=5.0,
        exit_price=440.0,
        pnl=-5.0,
    )


@pytest.fixture
def spike_series():
    """
    Sixty observations: flat 0.20 IV with a single spike to 0.40 at index 20.

    With window=10 the spike is the only day that triggers, and it has more
    than 30 observations after it.
    """
    ivs = [0.20] * 60
    ivs[20] = 0.40
    closes = [400.0 + i for i in range(60)]
    return make_observations(closes, ivs)

"""Tests for ingestion validation."""

from datetime import date

import pytest

from volput_app.data.models import MarketObservation
from volput_app.data.validators import validate_observations
from volput_app.errors import MalformedDataError, MisalignedSeriesError


class TestValidateObservations:
    """Test observation series validation."""

    def test_valid_series(self, observation_factory):
        """A clean series passes and is returned as a list."""
        observations = tuple(observation_factory([100.0, 101.0], [0.2, 1.0]))
        assert validate_observations(observations) == list(observations)

    def test_duplicate_date(self):
        """Repeated dates raise MisalignedSeriesError with positions."""
        observations = [
            MarketObservation(date=date(2024, 1, 2), close=100.0, iv=0.2),
            MarketObservation(date=date(2024, 1, 2), close=101.0, iv=0.2),
        ]
        with pytest.raises(MisalignedSeriesError) as exc_info:
            validate_observations(observations)
        assert exc_info.value.index == 1
        assert exc_info.value.previous_date == date(2024, 1, 2)

    @pytest.mark.parametrize("close", [0.0, -5.0, float("nan")])
    def test_bad_close(self, observation_factory, close):
        """Non-positive or NaN closes raise MalformedDataError."""
        with pytest.raises(MalformedDataError) as exc_info:
            validate_observations(observation_factory([100.0, close], [0.2, 0.2]))
        assert exc_info.value.field == "close"

    @pytest.mark.parametrize("iv", [0.0, -0.1, 1.01, float("nan")])
    def test_bad_iv(self, observation_factory, iv):
        """IV outside (0, 1] raises MalformedDataError."""
        with pytest.raises(MalformedDataError) as exc_info:
            validate_observations(observation_factory([100.0], [iv]))
        assert exc_info.value.field == "iv"

    def test_empty_series(self):
        """An empty series is valid."""
        assert validate_observations([]) == []

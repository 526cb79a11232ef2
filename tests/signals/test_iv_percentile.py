"""Tests for the rolling IV percentile signal"""

import numpy as np
import pytest

from volput_app.data.models import SignalRecord
from volput_app.errors import InvalidInputError, MisalignedSeriesError
from volput_app.signals import attach_signals, compute_signal


class TestWarmup:
    """Test behaviour before the rolling window is full"""

    def test_series_shorter_than_window_never_triggers(self, observation_factory):
        """Every record is undefined/false when the series is shorter than the window"""
        observations = observation_factory([100.0] * 50, np.linspace(0.1, 0.9, 50))
        records = compute_signal(observations, window=100)

        assert len(records) == 50
        assert all(r.threshold is None for r in records)
        assert not any(r.triggered for r in records)

    def test_first_defined_index_is_window_minus_one(self, observation_factory):
        """Threshold appears exactly when window observations are available"""
        observations = observation_factory([100.0] * 10, [0.2] * 10)
        records = compute_signal(observations, window=5)

        assert [r.threshold is None for r in records[:4]] == [True] * 4
        assert records[4].threshold is not None

    def test_empty_series(self):
        """Empty input yields empty output"""
        assert compute_signal([], window=5) == []


class TestThreshold:
    """Test threshold values and trigger"""

    def test_constant_iv_never_triggers(self, observation_factory):
        """A constant series has threshold equal to the constant and no trigger"""
        observations = observation_factory([100.0] * 30, [0.25] * 30)
        records = compute_signal(observations, window=10)

        for record in records[9:]:
            assert record.threshold == 0.25
            assert record.triggered is False

    def test_linear_interpolation(self, observation_factory):
        """Threshold interpolates linearly between order statistics"""
        ivs = [0.1, 0.2, 0.3, 0.4, 0.5]
        observations = observation_factory([100.0] * 5, ivs)
        records = compute_signal(observations, window=5, percentile=0.8)

        # position = 0.8 * 4 = 3.2 -> 0.4 + 0.2 * (0.5 - 0.4)
        assert records[4].threshold == pytest.approx(0.42)
        assert records[4].triggered is True

    def test_matches_numpy_percentile(self, observation_factory):
        """Rolling thresholds agree with a direct numpy calculation"""
        rng = np.random.default_rng(7)
        ivs = np.clip(rng.normal(0.2, 0.05, 40), 0.05, 0.6)
        observations = observation_factory([100.0] * 40, ivs)
        records = compute_signal(observations, window=15, percentile=0.8)

        for i in range(14, 40):
            expected = np.percentile(ivs[i - 14:i + 1], 80)
            assert records[i].threshold == pytest.approx(expected)
            assert records[i].triggered == (ivs[i] > expected)

    def test_trigger_is_strictly_greater(self, observation_factory):
        """IV equal to the threshold does not trigger"""
        observations = observation_factory([100.0] * 3, [0.3, 0.3, 0.3])
        records = compute_signal(observations, window=3, percentile=0.5)
        assert records[2].threshold == 0.3
        assert records[2].triggered is False

    def test_spike_triggers(self, spike_series):
        """A single IV spike triggers on its own day only"""
        records = compute_signal(spike_series, window=10)
        triggered = [i for i, r in enumerate(records) if r.triggered]
        assert triggered == [20]

    def test_repeatable(self, spike_series):
        """Repeated calls give identical output"""
        assert compute_signal(spike_series, window=10) == compute_signal(spike_series, window=10)


class TestValidation:
    """Test argument validation"""

    @pytest.mark.parametrize("window", [0, -3, 2.5, True])
    def test_bad_window(self, spike_series, window):
        """Non-positive or non-integer window is rejected"""
        with pytest.raises(InvalidInputError) as exc_info:
            compute_signal(spike_series, window=window)
        assert exc_info.value.parameter == "window"

    def test_numpy_integer_window(self, spike_series):
        """A numpy integer window behaves like the equivalent int"""
        assert compute_signal(spike_series, window=np.int64(10)) == compute_signal(spike_series, window=10)

    @pytest.mark.parametrize("percentile", [0.0, 1.0, 1.5, -0.1])
    def test_bad_percentile(self, spike_series, percentile):
        """Percentile outside (0, 1) is rejected"""
        with pytest.raises(InvalidInputError):
            compute_signal(spike_series, percentile=percentile)


class TestAttachSignals:
    """Test pairing observations with signals"""

    def test_attach(self, spike_series):
        """Signals are attached in order"""
        records = compute_signal(spike_series, window=10)
        rows = attach_signals(spike_series, records)

        assert len(rows) == len(spike_series)
        assert rows[20].triggered is True
        assert rows[20].iv == 0.40
        assert rows[20].date == spike_series[20].date

    def test_length_mismatch(self, spike_series):
        """Mismatched lengths raise MisalignedSeriesError"""
        with pytest.raises(MisalignedSeriesError):
            attach_signals(spike_series, [SignalRecord()] * 3)

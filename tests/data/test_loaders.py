"""Tests for the CSV and synthetic price/IV providers."""

from datetime import date

import pytest

from volput_app.config.defaults import DataSourceParams, SyntheticParams
from volput_app.data.loaders import generate_synthetic_series, load_csv_series, load_market_data
from volput_app.errors import MalformedDataError, MisalignedSeriesError


def _write(path, text):
    path.write_text(text)
    return path


@pytest.fixture
def csv_pair(tmp_path):
    """Matching price and IV files for three trading days."""
    prices = _write(tmp_path / "prices.csv",
                    "Date,Close\n2024-01-02,470.5\n2024-01-03,468.0\n2024-01-04,467.25\n")
    ivs = _write(tmp_path / "iv.csv",
                 "Date,IV\n2024-01-02,0.14\n2024-01-03,0.15\n2024-01-04,0.16\n")
    return prices, ivs


class TestCsvSeries:
    """Test loading history from CSV files."""

    def test_load_matching_files(self, csv_pair):
        """Matching files load into ordered observations."""
        observations = load_csv_series(*csv_pair)

        assert [obs.date for obs in observations] == [
            date(2024, 1, 2), date(2024, 1, 3), date(2024, 1, 4)]
        assert observations[0].close == 470.5
        assert observations[2].iv == 0.16

    def test_date_mismatch_raises(self, tmp_path, csv_pair):
        """Files disagreeing on dates raise MisalignedSeriesError."""
        prices, _ = csv_pair
        ivs = _write(tmp_path / "iv_gap.csv",
                     "Date,IV\n2024-01-02,0.14\n2024-01-04,0.16\n")
        with pytest.raises(MisalignedSeriesError) as exc_info:
            load_csv_series(prices, ivs)
        assert exc_info.value.index == 1

    def test_inner_join_drops_unmatched(self, tmp_path, csv_pair):
        """With inner_join only shared dates are kept."""
        prices, _ = csv_pair
        ivs = _write(tmp_path / "iv_gap.csv",
                     "Date,IV\n2024-01-02,0.14\n2024-01-04,0.16\n")
        observations = load_csv_series(prices, ivs, DataSourceParams(inner_join=True))
        assert [obs.date for obs in observations] == [date(2024, 1, 2), date(2024, 1, 4)]

    def test_non_monotonic_dates_raise(self, tmp_path):
        """Out-of-order dates raise MisalignedSeriesError."""
        prices = _write(tmp_path / "p.csv", "Date,Close\n2024-01-03,1.0\n2024-01-02,2.0\n")
        ivs = _write(tmp_path / "v.csv", "Date,IV\n2024-01-03,0.1\n2024-01-02,0.2\n")
        with pytest.raises(MisalignedSeriesError):
            load_csv_series(prices, ivs)

    def test_missing_column(self, tmp_path, csv_pair):
        """A missing value column raises MalformedDataError."""
        _, ivs = csv_pair
        prices = _write(tmp_path / "p.csv", "Date,Price\n2024-01-02,470.5\n")
        with pytest.raises(MalformedDataError) as exc_info:
            load_csv_series(prices, ivs)
        assert exc_info.value.field == "Close"

    def test_non_numeric_value(self, tmp_path, csv_pair):
        """Unparseable numbers raise MalformedDataError."""
        _, ivs = csv_pair
        prices = _write(tmp_path / "p.csv",
                        "Date,Close\n2024-01-02,abc\n2024-01-03,468.0\n2024-01-04,467.25\n")
        with pytest.raises(MalformedDataError):
            load_csv_series(prices, ivs)

    def test_missing_file(self, tmp_path, csv_pair):
        """An unreadable file raises MalformedDataError."""
        _, ivs = csv_pair
        with pytest.raises(MalformedDataError):
            load_csv_series(tmp_path / "nope.csv", ivs)

    def test_custom_columns(self, tmp_path):
        """Column names come from the source parameters."""
        prices = _write(tmp_path / "p.csv", "day,px\n2024-01-02,10.0\n")
        ivs = _write(tmp_path / "v.csv", "day,vol\n2024-01-02,0.3\n")
        params = DataSourceParams(date_column="day", close_column="px", iv_column="vol")
        observations = load_csv_series(prices, ivs, params)
        assert observations[0].close == 10.0
        assert observations[0].iv == 0.3


class TestSyntheticSeries:
    """Test the seeded random-walk generator."""

    def test_deterministic(self):
        """The same seed gives identical series."""
        assert generate_synthetic_series() == generate_synthetic_series()

    def test_seed_changes_series(self):
        """Different seeds give different series."""
        a = generate_synthetic_series(SyntheticParams(seed=1))
        b = generate_synthetic_series(SyntheticParams(seed=2))
        assert [o.close for o in a] != [o.close for o in b]

    def test_weekdays_of_2024(self):
        """Default span covers every weekday from 2 Jan to 31 Dec 2024."""
        observations = generate_synthetic_series()
        assert observations[0].date == date(2024, 1, 2)
        assert observations[-1].date == date(2024, 12, 31)
        assert len(observations) == 261
        assert all(obs.date.weekday() < 5 for obs in observations)

    def test_iv_clamped(self):
        """IV stays within the configured clamp."""
        params = SyntheticParams(iv_std=0.5)
        observations = generate_synthetic_series(params)
        assert all(params.iv_floor <= obs.iv <= params.iv_cap for obs in observations)


class TestLoadMarketData:
    """Test source selection."""

    def test_falls_back_to_synthetic(self, tmp_path):
        """Missing CSV files fall back to synthetic data."""
        source = DataSourceParams(price_path=str(tmp_path / "a.csv"),
                                  iv_path=str(tmp_path / "b.csv"))
        assert load_market_data(source) == generate_synthetic_series()

    def test_prefers_csv(self, csv_pair):
        """Existing CSV files are used."""
        prices, ivs = csv_pair
        source = DataSourceParams(price_path=str(prices), iv_path=str(ivs))
        assert len(load_market_data(source)) == 3

    def test_force_synthetic(self, csv_pair):
        """force_synthetic ignores existing files."""
        prices, ivs = csv_pair
        source = DataSourceParams(price_path=str(prices), iv_path=str(ivs))
        assert len(load_market_data(source, force_synthetic=True)) == 261

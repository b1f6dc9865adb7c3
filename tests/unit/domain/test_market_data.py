"""Tests for src/domain/models/market_data.py."""

from datetime import date

import pytest
from pydantic import ValidationError

from src.domain.models.market_data import DailyAssetSeries, DailyBar

_JAN_1_MS = 1704067200000  # 2024-01-01T00:00:00Z
_DAY_MS = 86_400_000


# --- DailyBar ---

def test_daily_bar_negative_price_raises():
    with pytest.raises(ValidationError):
        DailyBar(bar_date=date(2024, 1, 1), price=-1.0, market_cap=0.0, volume=0.0)


def test_daily_bar_zero_values_allowed():
    bar = DailyBar(bar_date=date(2024, 1, 1), price=0.0, market_cap=0.0, volume=0.0)
    assert bar.price == 0.0


# --- DailyAssetSeries.from_columns ---

def test_from_columns_builds_bars():
    s = DailyAssetSeries.from_columns(
        "JUP",
        dates=["2024-01-01", "2024-01-02"],
        prices=[1.0, 1.1],
        market_caps=[100.0, 110.0],
        volumes=[5.0, 6.0],
    )
    assert len(s) == 2
    assert s.dates == [date(2024, 1, 1), date(2024, 1, 2)]
    assert s.prices == [1.0, 1.1]
    assert s.market_caps == [100.0, 110.0]
    assert s.volumes == [5.0, 6.0]


def test_from_columns_length_mismatch_raises():
    with pytest.raises(ValueError, match="Column lengths differ"):
        DailyAssetSeries.from_columns("JUP", ["2024-01-01"], [1.0, 2.0], [1.0], [1.0])


def test_series_duplicate_date_raises():
    with pytest.raises(ValidationError):
        DailyAssetSeries.from_columns("JUP", ["2024-01-01", "2024-01-01"], [1.0, 1.0], [1.0, 1.0], [1.0, 1.0])


def test_series_out_of_order_raises():
    with pytest.raises(ValidationError):
        DailyAssetSeries.from_columns("JUP", ["2024-01-02", "2024-01-01"], [1.0, 1.0], [1.0, 1.0], [1.0, 1.0])


def test_series_gaps_allowed():
    s = DailyAssetSeries.from_columns("JUP", ["2024-01-01", "2024-01-05"], [1.0, 2.0], [1.0, 2.0], [1.0, 2.0])
    assert len(s) == 2


def test_empty_series_allowed():
    assert len(DailyAssetSeries(symbol="JUP")) == 0


# --- DailyAssetSeries.from_market_chart ---

def test_from_market_chart_one_bar_per_utc_date():
    payload = {
        "prices": [[_JAN_1_MS, 1.0], [_JAN_1_MS + _DAY_MS, 2.0]],
        "market_caps": [[_JAN_1_MS, 10.0], [_JAN_1_MS + _DAY_MS, 20.0]],
        "total_volumes": [[_JAN_1_MS, 100.0], [_JAN_1_MS + _DAY_MS, 200.0]],
    }
    s = DailyAssetSeries.from_market_chart("JUP", payload)
    assert s.dates == [date(2024, 1, 1), date(2024, 1, 2)]
    assert s.prices == [1.0, 2.0]
    assert s.volumes == [100.0, 200.0]


def test_from_market_chart_last_sample_of_day_wins():
    noon = _JAN_1_MS + _DAY_MS // 2
    payload = {
        "prices": [[_JAN_1_MS, 1.0], [noon, 1.5]],
        "market_caps": [[_JAN_1_MS, 10.0], [noon, 15.0]],
        "total_volumes": [[_JAN_1_MS, 100.0], [noon, 150.0]],
    }
    s = DailyAssetSeries.from_market_chart("JUP", payload)
    assert len(s) == 1
    assert s.prices == [1.5]
    assert s.market_caps == [15.0]


def test_from_market_chart_drops_incomplete_dates():
    payload = {
        "prices": [[_JAN_1_MS, 1.0], [_JAN_1_MS + _DAY_MS, 2.0]],
        "market_caps": [[_JAN_1_MS, 10.0], [_JAN_1_MS + _DAY_MS, 20.0]],
        "total_volumes": [[_JAN_1_MS, 100.0]],
    }
    s = DailyAssetSeries.from_market_chart("JUP", payload)
    assert s.dates == [date(2024, 1, 1)]

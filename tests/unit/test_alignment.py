"""Unit tests for SeriesAlignmentService and AlignedSeries."""

from __future__ import annotations

from datetime import date, timedelta

import numpy as np
import pytest

from src.domain.models.backtest import BacktestConfig
from src.domain.models.enums import BacktestWindow
from src.domain.models.market_data import DailyAssetSeries
from src.domain.services.alignment import SeriesAlignmentService

_START = date(2024, 1, 1)


def _days(n: int, offset: int = 0) -> list[date]:
    return [_START + timedelta(days=offset + i) for i in range(n)]


def _series(symbol: str, dates: list[date], prices: list[float]) -> DailyAssetSeries:
    return DailyAssetSeries.from_columns(
        symbol,
        dates=dates,
        prices=prices,
        market_caps=[p * 1_000.0 for p in prices],
        volumes=[p * 10.0 for p in prices],
    )


@pytest.fixture()
def svc():
    return SeriesAlignmentService()


# ======================================================================== #
# trim_calendar                                                              #
# ======================================================================== #


def test_window_keeps_trailing_dates(svc):
    calendar = _days(400)
    trimmed = svc.trim_calendar(calendar, BacktestConfig(backtest_window=BacktestWindow.TWELVE_MONTHS))
    assert len(trimmed) == 360
    assert trimmed[-1] == calendar[-1]
    assert trimmed[0] == calendar[40]


def test_window_longer_than_calendar_keeps_everything(svc):
    calendar = _days(50)
    assert svc.trim_calendar(calendar, BacktestConfig(backtest_window=BacktestWindow.SIX_MONTHS)) == calendar


def test_explicit_range_is_inclusive(svc):
    calendar = _days(30)
    cfg = BacktestConfig(start_date=calendar[5], end_date=calendar[9])
    assert svc.trim_calendar(calendar, cfg) == calendar[5:10]


def test_explicit_range_start_before_calendar_uses_head(svc):
    calendar = _days(30)
    cfg = BacktestConfig(start_date=date(2023, 1, 1), end_date=calendar[2])
    assert svc.trim_calendar(calendar, cfg) == calendar[:3]


def test_explicit_range_end_after_calendar_runs_to_tail(svc):
    calendar = _days(30)
    cfg = BacktestConfig(start_date=calendar[25], end_date=date(2030, 1, 1))
    assert svc.trim_calendar(calendar, cfg) == calendar[25:]


def test_explicit_range_overrides_window(svc):
    calendar = _days(400)
    cfg = BacktestConfig(
        backtest_window=BacktestWindow.SIX_MONTHS,
        start_date=calendar[0],
        end_date=calendar[-1],
    )
    assert len(svc.trim_calendar(calendar, cfg)) == 400


def test_start_only_falls_back_to_window(svc):
    calendar = _days(400)
    cfg = BacktestConfig(backtest_window=BacktestWindow.SIX_MONTHS, start_date=calendar[0])
    assert len(svc.trim_calendar(calendar, cfg)) == 180


# ======================================================================== #
# align                                                                      #
# ======================================================================== #


def test_fully_observed_series_is_unchanged(svc):
    calendar = _days(3)
    aligned = svc.align(_series("A", calendar, [1.0, 2.0, 3.0]), calendar)
    np.testing.assert_allclose(aligned.prices, [1.0, 2.0, 3.0])
    np.testing.assert_allclose(aligned.market_caps, [1_000.0, 2_000.0, 3_000.0])
    assert not aligned.stale.any()


def test_interior_gap_carried_forward(svc):
    calendar = _days(4)
    series = _series("A", [calendar[0], calendar[3]], [1.0, 4.0])
    aligned = svc.align(series, calendar)
    np.testing.assert_allclose(aligned.prices, [1.0, 1.0, 1.0, 4.0])
    assert aligned.stale.tolist() == [False, True, True, False]


def test_leading_gap_seeded_with_first_value(svc):
    calendar = _days(5)
    series = _series("A", calendar[3:], [7.0, 8.0])
    aligned = svc.align(series, calendar)
    np.testing.assert_allclose(aligned.prices, [7.0, 7.0, 7.0, 7.0, 8.0])
    np.testing.assert_allclose(aligned.volumes, [70.0, 70.0, 70.0, 70.0, 80.0])
    assert aligned.stale.tolist() == [True, True, True, False, False]


def test_dates_outside_calendar_ignored(svc):
    calendar = _days(2, offset=10)
    series = _series("A", _days(15), [float(i) for i in range(15)])
    aligned = svc.align(series, calendar)
    np.testing.assert_allclose(aligned.prices, [10.0, 11.0])


def test_empty_series_aligns_to_zeros(svc):
    calendar = _days(3)
    aligned = svc.align(DailyAssetSeries(symbol="A"), calendar)
    np.testing.assert_allclose(aligned.prices, [0.0, 0.0, 0.0])
    assert aligned.stale.all()


def test_align_all_keys_by_symbol(svc):
    calendar = _days(2)
    aligned = svc.align_all({"A": _series("A", calendar, [1.0, 1.0]), "B": _series("B", calendar, [2.0, 2.0])}, calendar)
    assert set(aligned) == {"A", "B"}
    assert len(aligned["B"]) == 2


# ======================================================================== #
# AlignedSeries helpers                                                      #
# ======================================================================== #


def test_trailing_volume_uses_available_history(svc):
    calendar = _days(5)
    aligned = svc.align(_series("A", calendar, [1.0, 2.0, 3.0, 4.0, 5.0]), calendar)
    # volumes 10..50
    assert aligned.trailing_volume(1, lookback_days=3) == pytest.approx(15.0)
    assert aligned.trailing_volume(4, lookback_days=3) == pytest.approx(40.0)


def test_market_data_view(svc):
    calendar = _days(3)
    aligned = svc.align(_series("A", [calendar[0]], [2.0]), calendar)
    point = aligned.market_data(2, lookback_days=30)
    assert point.price == 2.0
    assert point.mcap == 2_000.0
    assert point.avg_daily_vol == pytest.approx(20.0)
    assert point.is_stale is True

"""Calendar trimming and date alignment.

The benchmark series defines the master calendar.  Every other asset is
left-joined onto it:

    observed date      → the asset's own values
    gap after history  → last observed values carried forward
    gap before history → the asset's FIRST observed values (seeded backwards)

Carried and seeded dates are marked stale so screening can flag them.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date

import numpy as np
import pandas as pd

from src.domain.models.backtest import BacktestConfig
from src.domain.models.market_data import DailyAssetSeries
from src.domain.models.screening import MarketDataPoint

logger = logging.getLogger(__name__)

_COLUMNS = ["price", "market_cap", "volume"]


@dataclass(frozen=True)
class AlignedSeries:
    """One asset's values on every calendar date (arrays share one length)."""

    symbol: str
    prices: np.ndarray
    market_caps: np.ndarray
    volumes: np.ndarray
    stale: np.ndarray

    def __len__(self) -> int:
        return len(self.prices)

    def trailing_volume(self, day: int, lookback_days: int) -> float:
        """Mean volume over the lookback window ending at day (inclusive).

        Uses whatever history is available when day < lookback_days − 1;
        dates before the calendar start are never counted.
        """
        start = max(0, day - lookback_days + 1)
        return float(self.volumes[start : day + 1].mean())

    def market_data(self, day: int, lookback_days: int) -> MarketDataPoint:
        """The screening view of this asset on calendar index day."""
        return MarketDataPoint(
            price=float(self.prices[day]),
            mcap=float(self.market_caps[day]),
            avg_daily_vol=self.trailing_volume(day, lookback_days),
            is_stale=bool(self.stale[day]),
        )


class SeriesAlignmentService:
    """Pure computation service for the master calendar and its alignment."""

    def trim_calendar(self, calendar: Sequence[date], config: BacktestConfig) -> list[date]:
        """Cut the master calendar down to the backtest range.

        With both start_date and end_date set: from the first date ≥ start
        (the calendar head if none) through the last date ≤ end.  Otherwise
        the trailing backtest_window.days dates, or the whole calendar when
        it is shorter.
        """
        dates = list(calendar)
        if config.has_explicit_range:
            start = next((i for i, d in enumerate(dates) if d >= config.start_date), 0)
            end = next((i for i, d in enumerate(dates) if d > config.end_date), len(dates))
            trimmed = dates[start:end]
            logger.info(
                "Explicit range %s..%s selects %d of %d calendar dates.",
                config.start_date,
                config.end_date,
                len(trimmed),
                len(dates),
            )
            return trimmed

        window_days = config.backtest_window.days
        trimmed = dates[max(0, len(dates) - window_days) :]
        if len(trimmed) < window_days:
            logger.info(
                "Calendar holds %d dates, shorter than the %s window (%d); using all of it.",
                len(dates),
                config.backtest_window.value,
                window_days,
            )
        return trimmed

    def align(self, series: DailyAssetSeries, calendar: Sequence[date]) -> AlignedSeries:
        """Left-join one series onto the calendar with carry-forward."""
        index = pd.Index(list(calendar))
        if len(series) == 0:
            zeros = np.zeros(len(index))
            return AlignedSeries(series.symbol, zeros, zeros.copy(), zeros.copy(), np.ones(len(index), dtype=bool))

        frame = pd.DataFrame(
            {"price": series.prices, "market_cap": series.market_caps, "volume": series.volumes},
            index=pd.Index(series.dates),
            columns=_COLUMNS,
        )
        aligned = frame.reindex(index)
        stale = aligned["price"].isna().to_numpy()
        aligned = aligned.ffill().fillna(frame.iloc[0])

        if stale.any() and not stale.all() and stale[0]:
            logger.debug("%s: leading gap seeded from first observation %s.", series.symbol, series.dates[0])

        return AlignedSeries(
            symbol=series.symbol,
            prices=aligned["price"].to_numpy(dtype=float),
            market_caps=aligned["market_cap"].to_numpy(dtype=float),
            volumes=aligned["volume"].to_numpy(dtype=float),
            stale=stale,
        )

    def align_all(
        self,
        series: Mapping[str, DailyAssetSeries],
        calendar: Sequence[date],
    ) -> dict[str, AlignedSeries]:
        return {symbol: self.align(s, calendar) for symbol, s in series.items()}

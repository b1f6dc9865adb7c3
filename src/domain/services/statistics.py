"""Performance statistics service.

Formulas (daily data, 365-day year):
  cumulative    R   = V_last / V_first − 1
  daily returns r_t = V_t / V_{t−1} − 1
  annualized    A   = (1 + R)^(365 / n) − 1     n = number of points
  volatility    σ   = std(r) · √365             population std (ddof = 0)
  Sharpe        S   = A / σ                     0 when σ == 0, no risk-free rate
  drawdown      DD  = min_{t≥1} (V_t / max_{1≤u≤t} V_u − 1)

The first point anchors returns but is never a drawdown peak: a series that
falls from V_0 only registers the decline measured from V_1 onwards.
When 1 + R ≤ 0 (a levered fixed-weight index wiped out) A is −1.

n is the number of observations, not elapsed calendar days: a 181-point
series annualises with exponent 365/181.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

from src.domain.models.backtest import FinancialStats

_DAYS_PER_YEAR = 365
_NAV_BASE = 100.0


class StatisticsService:
    """Pure computation service for NAV / price series statistics.

    Responsibilities (single, focused):
    - Convert a series to simple daily returns.
    - Compute cumulative / annualized return, volatility, Sharpe, drawdown.
    - Rebase a price series to a basis-100 NAV.

    The class is stateless; series are passed per-call.
    """

    def compute(self, series: Sequence[float]) -> FinancialStats:
        """Compute FinancialStats for any NAV or price series.

        A series shorter than two points returns all-zero statistics, as does
        a series whose first value is not positive (returns are undefined).
        """
        values = np.asarray(series, dtype=float)
        if values.size < 2 or values[0] <= 0.0:
            return FinancialStats.zero()

        cumulative = float(values[-1] / values[0] - 1.0)
        returns = self.daily_returns(values)

        if 1.0 + cumulative <= 0.0:
            annualized = -1.0
        else:
            annualized = (1.0 + cumulative) ** (_DAYS_PER_YEAR / values.size) - 1.0
        volatility = float(np.std(returns)) * math.sqrt(_DAYS_PER_YEAR)
        sharpe = 0.0 if volatility == 0.0 else annualized / volatility

        return FinancialStats(
            cumulative_return=cumulative,
            annualized_return=float(annualized),
            annualized_volatility=volatility,
            sharpe_ratio=float(sharpe),
            max_drawdown=self.max_drawdown(values),
        )

    def daily_returns(self, series: Sequence[float] | np.ndarray) -> np.ndarray:
        """Simple day-over-day returns; a zero prior value yields a 0.0 return."""
        values = np.asarray(series, dtype=float)
        if values.size < 2:
            return np.zeros(0)
        prev, cur = values[:-1], values[1:]
        with np.errstate(divide="ignore", invalid="ignore"):
            returns = np.where(prev != 0.0, cur / prev - 1.0, 0.0)
        return returns

    def max_drawdown(self, series: Sequence[float] | np.ndarray) -> float:
        """Most negative V_t / running_peak − 1 over the series (≤ 0).

        The running peak starts at −∞ on the second point, so V_0 is never a
        peak and [100, 50, 40] draws down 40/50 − 1, not 40/100 − 1.
        """
        values = np.asarray(series, dtype=float)[1:]
        if values.size == 0:
            return 0.0
        peaks = np.maximum.accumulate(values)
        with np.errstate(divide="ignore", invalid="ignore"):
            drawdowns = np.where(peaks > 0.0, values / peaks - 1.0, 0.0)
        return float(min(0.0, float(drawdowns.min())))

    def to_nav(self, prices: Sequence[float], base: float = _NAV_BASE) -> list[float]:
        """Rebase a price series so its first point equals base.

        A zero first price is treated as 1 so the rebased series stays finite.
        """
        if len(prices) == 0:
            return []
        start = prices[0] or 1.0
        return [p / start * base for p in prices]

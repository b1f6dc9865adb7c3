"""Backtest domain models.

BacktestConfig  — strategy parameters for one backtest run
FinancialStats  — performance statistics derived from a NAV or price series
SeriesData      — a named NAV series with its statistics (index / benchmark)
AssetHistory    — one constituent's aligned price / market-cap / weight history
Constituent     — an asset that held weight at least once, with its history
UniverseStats   — aggregate universe eligibility counts
BacktestResult  — the terminal output of one orchestration call
SweepResult     — one point of a parameter sweep

Everything except FinancialStats serialises with camelCase aliases; the
statistics keep snake_case keys on the wire.
"""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .enums import BacktestWindow, RebalanceInterval
from .screening import DataDiscrepancy, RebalanceEvent

_WIRE_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class BacktestConfig(BaseModel):
    """Strategy and simulation parameters for a backtest run.

    start_date / end_date override backtest_window only when both are set.
    fixed_weights switches the engine into static-allocation mode: the map is
    applied verbatim on the first day and held constant thereafter.
    min_weight is advisory; the allocation algorithm does not enforce it.
    """

    model_config = _WIRE_CONFIG

    rebalance_interval: RebalanceInterval = RebalanceInterval.WEEKLY
    num_assets: int = Field(default=10, ge=1)
    max_weight: float = Field(default=0.25, gt=0.0, le=1.0)
    min_weight: float = Field(default=0.01, ge=0.0, le=1.0)
    backtest_window: BacktestWindow = BacktestWindow.TWELVE_MONTHS
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    fixed_weights: dict[str, float] | None = None

    @model_validator(mode="after")
    def _min_weight_below_max(self) -> BacktestConfig:
        if self.min_weight > self.max_weight:
            raise ValueError(
                f"min_weight ({self.min_weight}) must not exceed max_weight ({self.max_weight})"
            )
        return self

    @model_validator(mode="after")
    def _date_range_ordered(self) -> BacktestConfig:
        if self.start_date is not None and self.end_date is not None:
            if self.start_date > self.end_date:
                raise ValueError(
                    f"start_date ({self.start_date.isoformat()}) is after "
                    f"end_date ({self.end_date.isoformat()})"
                )
        return self

    @model_validator(mode="after")
    def _fixed_weights_non_negative(self) -> BacktestConfig:
        if self.fixed_weights is not None:
            negative = sorted(s for s, w in self.fixed_weights.items() if w < 0.0)
            if negative:
                raise ValueError(f"fixed_weights must be non-negative; offending symbols: {negative}")
        return self

    @property
    def uses_fixed_weights(self) -> bool:
        return bool(self.fixed_weights)

    @property
    def has_explicit_range(self) -> bool:
        return self.start_date is not None and self.end_date is not None


class FinancialStats(BaseModel):
    """Performance statistics for a NAV or price series.

    max_drawdown ≤ 0.  All fields are 0.0 for a series shorter than two
    points.
    """

    model_config = ConfigDict(frozen=True)

    cumulative_return: float = 0.0
    annualized_return: float = 0.0
    annualized_volatility: float = Field(default=0.0, ge=0.0)
    sharpe_ratio: float = 0.0
    max_drawdown: float = Field(default=0.0, le=0.0)

    @classmethod
    def zero(cls) -> FinancialStats:
        return cls()


class SeriesData(BaseModel):
    model_config = _WIRE_CONFIG

    code: str
    dates: tuple[dt.date, ...]
    nav: tuple[float, ...]
    stats: FinancialStats


class AssetHistory(BaseModel):
    """Aligned daily history of one constituent over the backtest calendar.

    weights[d] is 0.0 on every date the asset was not held.
    """

    model_config = _WIRE_CONFIG

    dates: tuple[dt.date, ...]
    prices: tuple[float, ...]
    market_caps: tuple[float, ...]
    weights: tuple[float, ...]


class Constituent(BaseModel):
    model_config = _WIRE_CONFIG

    id: str
    symbol: str
    name: str
    current_weight: float = Field(ge=0.0)
    history: AssetHistory
    stats: FinancialStats
    active_discrepancies: tuple[DataDiscrepancy, ...] = ()


class UniverseStats(BaseModel):
    """Aggregate eligibility counts over the backtest window.

    Derived from each asset's window-average volume, independently of the
    day-by-day screening results.
    """

    model_config = _WIRE_CONFIG

    total_evaluated: int = Field(ge=0)
    failed_volume: int = Field(ge=0)
    failed_native: int = Field(ge=0)
    eligible_count: int = Field(ge=0)
    final_selected: int = Field(ge=0)


class BacktestResult(BaseModel):
    model_config = _WIRE_CONFIG

    config: BacktestConfig
    index: SeriesData
    benchmark: SeriesData
    constituents: tuple[Constituent, ...]
    rebalance_history: tuple[RebalanceEvent, ...]
    universe_stats: UniverseStats

    def to_wire(self) -> dict:
        """JSON-compatible dict in the camelCase wire shape."""
        return self.model_dump(mode="json", by_alias=True)


class SweepResult(BaseModel):
    """Index statistics for one configuration of a parameter sweep.

    id is "<interval>-<num_assets>-<max_weight>", e.g. "weekly-10-0.2".
    """

    model_config = _WIRE_CONFIG

    id: str
    config: BacktestConfig
    stats: FinancialStats

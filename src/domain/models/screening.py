"""Constituent screening domain models.

ScreeningRules       — tunable parameters of the eligibility rule table.
MarketDataPoint      — one asset's market data on one evaluation date.
DataDiscrepancy      — a data-quality flag attached to a snapshot row.
UniverseSnapshotItem — per-asset screening outcome (historical record).
RebalanceEvent       — one evaluation date's full snapshot; the audit trail.

Snapshot and event models serialise with camelCase aliases, which is the
wire shape downstream consumers read.
"""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .enums import AssetCategory, DiscrepancySeverity, DiscrepancyType, InclusionStatus

_WIRE_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

_DEFAULT_MIN_VOLUME_USD = 200_000.0
_DEFAULT_LOOKBACK_DAYS = 30


class ScreeningRules(BaseModel):
    """Parameters of the screening rule table.

    benchmark_symbol          — the reference asset; never an index constituent
    min_avg_daily_volume_usd  — liquidity floor on the trailing average volume
    volume_lookback_days      — trailing window for that average (shorter
                                history uses whatever is available)
    max_lst_positions         — liquid-staking tokens allowed per basket
    excluded_categories       — categories rejected outright
    volume_conflict_band      — relative distance from the volume floor inside
                                which a VOLUME_threshold_conflict flag is raised
    """

    model_config = ConfigDict(frozen=True)

    benchmark_symbol: str = "SOL"
    min_avg_daily_volume_usd: float = Field(default=_DEFAULT_MIN_VOLUME_USD, ge=0.0)
    volume_lookback_days: int = Field(default=_DEFAULT_LOOKBACK_DAYS, ge=1)
    max_lst_positions: int = Field(default=1, ge=0)
    excluded_categories: frozenset[AssetCategory] = frozenset({AssetCategory.STABLECOIN})
    volume_conflict_band: float = Field(default=0.10, ge=0.0, lt=1.0)

    @classmethod
    def default(cls) -> ScreeningRules:
        return cls()


class MarketDataPoint(BaseModel):
    """Market data for one asset on one evaluation date.

    avg_daily_vol is the trailing average volume (lookback window or the
    available history, whichever is shorter).  is_stale marks values that
    were carried forward because the asset had no observation that day.
    """

    model_config = ConfigDict(frozen=True)

    price: float = Field(ge=0.0)
    mcap: float = Field(ge=0.0)
    avg_daily_vol: float = Field(ge=0.0)
    is_stale: bool = False


class DataDiscrepancy(BaseModel):
    model_config = _WIRE_CONFIG

    type: DiscrepancyType
    severity: DiscrepancySeverity
    description: str
    provider_values: dict[str, str | float] = Field(default_factory=dict)
    contested: bool = False


class UniverseSnapshotItem(BaseModel):
    """Screening outcome for one asset on one rebalance date.

    weight is 0.0 for every rejected asset.  rejection_reason is None for
    INCLUDED rows and a plain-language sentence otherwise.
    """

    model_config = _WIRE_CONFIG

    asset_id: str
    symbol: str
    name: str
    price: float
    mcap: float
    avg_daily_vol: float
    is_native: bool
    status: InclusionStatus
    weight: float = Field(default=0.0, ge=0.0)
    audit_flags: tuple[DataDiscrepancy, ...] = ()
    rejection_reason: str | None = None

    @property
    def is_included(self) -> bool:
        return self.status == InclusionStatus.INCLUDED


class RebalanceEvent(BaseModel):
    """The full universe state on one rebalance date.

    total_mcap is the summed market cap of the selected constituents.
    turnover is one-way: ½ Σ |w_new − w_held| against the drifted weights
    held going into the date (0.0 for the initial construction).
    """

    model_config = _WIRE_CONFIG

    date: dt.date
    universe_snapshot: tuple[UniverseSnapshotItem, ...]
    total_mcap: float = Field(ge=0.0)
    turnover: float = Field(default=0.0, ge=0.0)

    @property
    def included(self) -> list[UniverseSnapshotItem]:
        return [item for item in self.universe_snapshot if item.is_included]

    def weights(self) -> dict[str, float]:
        """Symbol → assigned weight for the included constituents."""
        return {item.symbol: item.weight for item in self.included}

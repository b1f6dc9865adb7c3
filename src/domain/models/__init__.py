"""Domain model package.

All domain objects are pure Pydantic models with no I/O or infrastructure
dependencies.  Import from this package to avoid coupling application code
to individual module paths.
"""

from .assets import AssetDefinition, AssetUniverse
from .backtest import (
    AssetHistory,
    BacktestConfig,
    BacktestResult,
    Constituent,
    FinancialStats,
    SeriesData,
    SweepResult,
    UniverseStats,
)
from .enums import (
    AssetCategory,
    BacktestWindow,
    DiscrepancySeverity,
    DiscrepancyType,
    InclusionStatus,
    RebalanceInterval,
)
from .market_data import DailyAssetSeries, DailyBar
from .screening import (
    DataDiscrepancy,
    MarketDataPoint,
    RebalanceEvent,
    ScreeningRules,
    UniverseSnapshotItem,
)
from .validation import (
    ComplianceIssue,
    ComplianceReport,
    HistoryValidation,
    RebalanceValidation,
    RuleViolation,
)

__all__ = [
    # enums
    "AssetCategory",
    "BacktestWindow",
    "DiscrepancySeverity",
    "DiscrepancyType",
    "InclusionStatus",
    "RebalanceInterval",
    # assets
    "AssetDefinition",
    "AssetUniverse",
    # market data
    "DailyBar",
    "DailyAssetSeries",
    # screening
    "DataDiscrepancy",
    "MarketDataPoint",
    "RebalanceEvent",
    "ScreeningRules",
    "UniverseSnapshotItem",
    # backtest
    "AssetHistory",
    "BacktestConfig",
    "BacktestResult",
    "Constituent",
    "FinancialStats",
    "SeriesData",
    "SweepResult",
    "UniverseStats",
    # validation
    "ComplianceIssue",
    "ComplianceReport",
    "HistoryValidation",
    "RebalanceValidation",
    "RuleViolation",
]

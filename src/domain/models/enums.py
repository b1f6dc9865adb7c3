"""Domain enumerations for the index engine.

All string-valued enums use str mixin so they serialize cleanly to JSON
and remain comparable to plain strings (Pydantic default behaviour).
"""

from enum import Enum


class AssetCategory(str, Enum):
    L1 = "L1"
    DEFI = "DeFi"
    MEME = "Meme"
    INFRA = "Infra"
    STABLECOIN = "Stablecoin"
    LST = "LST"
    AI = "AI"
    DEPIN = "DePIN"
    NFT = "NFT"
    OTHER = "Other"


class InclusionStatus(str, Enum):
    """Screening outcome for one asset on one evaluation date.

    Rejections are listed in the order the screening rules are applied;
    REJECTED_RANK is assigned last, after the category post-pass.
    """

    INCLUDED = "INCLUDED"
    REJECTED_CATEGORY = "REJECTED_CATEGORY"
    REJECTED_LAUNCH = "REJECTED_LAUNCH"
    REJECTED_PRIMARY_NETWORK = "REJECTED_PRIMARY_NETWORK"
    REJECTED_NATIVE = "REJECTED_NATIVE"
    REJECTED_VOL = "REJECTED_VOL"
    REJECTED_AUDIT = "REJECTED_AUDIT"
    REJECTED_RANK = "REJECTED_RANK"


class RebalanceInterval(str, Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"

    @property
    def days(self) -> int:
        """Calendar-day cadence between rebalance dates."""
        return {
            RebalanceInterval.WEEKLY: 7,
            RebalanceInterval.BIWEEKLY: 14,
            RebalanceInterval.MONTHLY: 30,
        }[self]


class BacktestWindow(str, Enum):
    SIX_MONTHS = "6M"
    TWELVE_MONTHS = "12M"
    TWENTY_FOUR_MONTHS = "24M"
    THIRTY_SIX_MONTHS = "36M"

    @property
    def months(self) -> int:
        return {
            BacktestWindow.SIX_MONTHS: 6,
            BacktestWindow.TWELVE_MONTHS: 12,
            BacktestWindow.TWENTY_FOUR_MONTHS: 24,
            BacktestWindow.THIRTY_SIX_MONTHS: 36,
        }[self]

    @property
    def days(self) -> int:
        """Window length in daily observations (30 per month)."""
        return self.months * 30


class DiscrepancyType(str, Enum):
    PRICE_DIVERGENCE = "PRICE_divergence"
    VOLUME_THRESHOLD_CONFLICT = "VOLUME_threshold_conflict"
    METADATA_CONFLICT = "METADATA_conflict"
    STALE_DATA = "STALE_data"


class DiscrepancySeverity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    CRITICAL = "CRITICAL"

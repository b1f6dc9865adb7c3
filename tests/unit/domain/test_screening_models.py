"""Tests for src/domain/models/screening.py."""

from datetime import date

import pytest
from pydantic import ValidationError

from src.domain.models.enums import (
    AssetCategory,
    DiscrepancySeverity,
    DiscrepancyType,
    InclusionStatus,
)
from src.domain.models.screening import (
    DataDiscrepancy,
    MarketDataPoint,
    RebalanceEvent,
    ScreeningRules,
    UniverseSnapshotItem,
)


def _item(symbol: str, status: InclusionStatus = InclusionStatus.INCLUDED, weight: float = 0.0) -> UniverseSnapshotItem:
    return UniverseSnapshotItem(
        asset_id=f"asset-{symbol}",
        symbol=symbol,
        name=symbol,
        price=1.0,
        mcap=100.0,
        avg_daily_vol=500_000.0,
        is_native=True,
        status=status,
        weight=weight,
    )


# --- ScreeningRules ---

def test_screening_rules_defaults():
    rules = ScreeningRules.default()
    assert rules.benchmark_symbol == "SOL"
    assert rules.min_avg_daily_volume_usd == 200_000.0
    assert rules.volume_lookback_days == 30
    assert rules.max_lst_positions == 1
    assert rules.excluded_categories == frozenset({AssetCategory.STABLECOIN})


def test_screening_rules_negative_threshold_raises():
    with pytest.raises(ValidationError):
        ScreeningRules(min_avg_daily_volume_usd=-1.0)


def test_screening_rules_zero_lookback_raises():
    with pytest.raises(ValidationError):
        ScreeningRules(volume_lookback_days=0)


# --- MarketDataPoint ---

def test_market_data_point_not_stale_by_default():
    assert MarketDataPoint(price=1.0, mcap=1.0, avg_daily_vol=1.0).is_stale is False


def test_market_data_point_negative_mcap_raises():
    with pytest.raises(ValidationError):
        MarketDataPoint(price=1.0, mcap=-1.0, avg_daily_vol=1.0)


# --- UniverseSnapshotItem ---

def test_snapshot_item_is_included():
    assert _item("A").is_included is True
    assert _item("A", InclusionStatus.REJECTED_RANK).is_included is False


def test_snapshot_item_negative_weight_raises():
    with pytest.raises(ValidationError):
        _item("A", weight=-0.1)


def test_snapshot_item_serialises_camel_case():
    wire = _item("A").model_dump(mode="json", by_alias=True)
    assert wire["assetId"] == "asset-A"
    assert wire["avgDailyVol"] == 500_000.0
    assert wire["isNative"] is True
    assert wire["auditFlags"] == []
    assert wire["rejectionReason"] is None


def test_snapshot_item_accepts_camel_case_input():
    item = UniverseSnapshotItem.model_validate(
        {
            "assetId": "asset-A",
            "symbol": "A",
            "name": "A",
            "price": 1.0,
            "mcap": 1.0,
            "avgDailyVol": 1.0,
            "isNative": True,
            "status": "REJECTED_VOL",
        }
    )
    assert item.status == InclusionStatus.REJECTED_VOL


# --- DataDiscrepancy ---

def test_discrepancy_wire_shape():
    d = DataDiscrepancy(
        type=DiscrepancyType.STALE_DATA,
        severity=DiscrepancySeverity.LOW,
        description="carried",
        provider_values={"observed": 1.0},
    )
    wire = d.model_dump(mode="json", by_alias=True)
    assert wire["type"] == "STALE_data"
    assert wire["providerValues"] == {"observed": 1.0}
    assert wire["contested"] is False


# --- RebalanceEvent ---

def test_rebalance_event_included_and_weights():
    event = RebalanceEvent(
        date=date(2024, 1, 1),
        universe_snapshot=(
            _item("A", weight=0.6),
            _item("B", InclusionStatus.REJECTED_VOL),
            _item("C", weight=0.4),
        ),
        total_mcap=200.0,
    )
    assert [i.symbol for i in event.included] == ["A", "C"]
    assert event.weights() == {"A": 0.6, "C": 0.4}
    assert event.turnover == 0.0


def test_rebalance_event_wire_keys():
    event = RebalanceEvent(date=date(2024, 1, 1), universe_snapshot=(), total_mcap=0.0)
    wire = event.model_dump(mode="json", by_alias=True)
    assert set(wire) == {"date", "universeSnapshot", "totalMcap", "turnover"}
    assert wire["date"] == "2024-01-01"

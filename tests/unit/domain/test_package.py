"""Tests for src/domain/models/__init__.py — package exports."""

from src.domain.models import __all__ as domain_all
from src.domain.models import (
    # spot-check one import from each module
    AssetCategory,
    AssetDefinition,
    BacktestConfig,
    DailyAssetSeries,
    RebalanceEvent,
    RebalanceValidation,
)


def test_domain_models_exports_28_names():
    assert len(domain_all) == 28


def test_every_export_resolves():
    import src.domain.models as models

    for name in domain_all:
        assert hasattr(models, name), name


def test_asset_category_importable_from_package():
    assert AssetCategory.LST == "LST"


def test_asset_definition_importable_from_package():
    assert AssetDefinition.__name__ == "AssetDefinition"


def test_daily_asset_series_importable_from_package():
    assert DailyAssetSeries.__name__ == "DailyAssetSeries"


def test_rebalance_event_importable_from_package():
    assert RebalanceEvent.__name__ == "RebalanceEvent"


def test_backtest_config_importable_from_package():
    assert BacktestConfig.__name__ == "BacktestConfig"


def test_rebalance_validation_importable_from_package():
    assert RebalanceValidation.__name__ == "RebalanceValidation"

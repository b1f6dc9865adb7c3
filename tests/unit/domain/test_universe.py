"""Tests for src/domain/universe.py."""

from src.domain.models.enums import AssetCategory
from src.domain.universe import DEFAULT_UNIVERSE


def test_default_universe_has_26_assets():
    assert len(DEFAULT_UNIVERSE) == 26


def test_default_universe_starts_with_benchmark():
    sol = DEFAULT_UNIVERSE.assets[0]
    assert sol.symbol == "SOL"
    assert sol.category == AssetCategory.L1


def test_default_universe_has_exactly_one_lst():
    assert [a.symbol for a in DEFAULT_UNIVERSE if a.is_lst] == ["JITOSOL"]


def test_default_universe_has_no_stablecoins():
    assert not any(a.category == AssetCategory.STABLECOIN for a in DEFAULT_UNIVERSE)


def test_default_universe_entries_have_coingecko_ids():
    assert all(a.coingecko_id for a in DEFAULT_UNIVERSE)

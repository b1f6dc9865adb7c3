"""Tests for src/config.py."""

from __future__ import annotations

import logging

import pytest

from src.config import EngineSettings, configure_logging
from src.domain.models.screening import ScreeningRules


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    # keep a developer's .env or INDEX_* variables out of the defaults
    monkeypatch.chdir(tmp_path)
    for name in ("BENCHMARK_SYMBOL", "MIN_AVG_DAILY_VOLUME_USD", "VOLUME_LOOKBACK_DAYS", "MAX_LST_POSITIONS", "INDEX_CODE", "LOG_LEVEL"):
        monkeypatch.delenv(f"INDEX_{name}", raising=False)


def test_settings_defaults():
    s = EngineSettings()
    assert s.benchmark_symbol == "SOL"
    assert s.min_avg_daily_volume_usd == 200_000.0
    assert s.volume_lookback_days == 30
    assert s.max_lst_positions == 1
    assert s.index_code == "SOLECO"
    assert s.log_level == "WARNING"


def test_settings_read_prefixed_env(monkeypatch):
    monkeypatch.setenv("INDEX_MIN_AVG_DAILY_VOLUME_USD", "500000")
    monkeypatch.setenv("INDEX_INDEX_CODE", "TEST")
    s = EngineSettings()
    assert s.min_avg_daily_volume_usd == 500_000.0
    assert s.index_code == "TEST"


def test_settings_read_dotenv(tmp_path):
    (tmp_path / ".env").write_text("INDEX_MAX_LST_POSITIONS=2\nUNRELATED=1\n", encoding="utf-8")
    assert EngineSettings().max_lst_positions == 2


def test_screening_rules_from_settings(monkeypatch):
    monkeypatch.setenv("INDEX_VOLUME_LOOKBACK_DAYS", "14")
    rules = EngineSettings().screening_rules()
    assert isinstance(rules, ScreeningRules)
    assert rules.volume_lookback_days == 14
    assert rules.benchmark_symbol == "SOL"


def test_configure_logging_sets_root_level():
    configure_logging("debug")
    assert logging.getLogger().level == logging.DEBUG
    configure_logging("WARNING")
    assert logging.getLogger().level == logging.WARNING


def test_configure_logging_unknown_level_raises():
    with pytest.raises(ValueError):
        configure_logging("LOUD")

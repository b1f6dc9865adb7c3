"""Engine settings and logging setup.

Settings are read from the environment (prefix INDEX_) and an optional .env
file.  Only the command-line surface reads them; domain services receive
explicit ScreeningRules instead.
"""

from __future__ import annotations

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.domain.models.screening import ScreeningRules

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class EngineSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="INDEX_", env_file=".env", extra="ignore")

    benchmark_symbol: str = "SOL"
    min_avg_daily_volume_usd: float = Field(default=200_000.0, ge=0.0)
    volume_lookback_days: int = Field(default=30, ge=1)
    max_lst_positions: int = Field(default=1, ge=0)
    index_code: str = "SOLECO"
    log_level: str = "WARNING"

    def screening_rules(self) -> ScreeningRules:
        return ScreeningRules(
            benchmark_symbol=self.benchmark_symbol,
            min_avg_daily_volume_usd=self.min_avg_daily_volume_usd,
            volume_lookback_days=self.volume_lookback_days,
            max_lst_positions=self.max_lst_positions,
        )


def configure_logging(level: str = "WARNING") -> None:
    """Configure root logging once for the process; an unknown level name raises ValueError."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level!r}")
    logging.basicConfig(level=numeric, format=_LOG_FORMAT, force=True)

"""JSON file implementation of AssetSeriesRepository.

The document maps symbol → series in either of two shapes:

    columns       {"dates": [...], "prices": [...], "marketCaps": [...], "volumes": [...]}
                  ("market_caps" is accepted for "marketCaps")
    market chart  {"prices": [[ts_ms, v], ...], "market_caps": [...], "total_volumes": [...]}

The file is parsed once, lazily, on the first load().
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from src.domain.errors import SeriesFileError
from src.domain.models.market_data import DailyAssetSeries
from src.domain.repositories.series import AssetSeriesRepository

logger = logging.getLogger(__name__)


class JsonSeriesRepository(AssetSeriesRepository):
    def __init__(self, path: Path) -> None:
        self._path = path
        self._cache: dict[str, DailyAssetSeries] | None = None

    def load(self, symbols: Iterable[str] | None = None) -> dict[str, DailyAssetSeries]:
        if self._cache is None:
            self._cache = self._read()
        if symbols is None:
            return dict(self._cache)
        return {s: self._cache[s] for s in symbols if s in self._cache}

    def _read(self) -> dict[str, DailyAssetSeries]:
        if not self._path.exists():
            raise SeriesFileError(f"Series file not found: '{self._path}'")

        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise SeriesFileError(f"Failed to read series file '{self._path}': {exc}") from exc
        except json.JSONDecodeError as exc:
            raise SeriesFileError(f"Invalid JSON in series file '{self._path}': {exc}") from exc

        if not isinstance(payload, dict):
            raise SeriesFileError(
                f"Series file '{self._path}' must contain a JSON object keyed by symbol."
            )

        series = {symbol: self._parse_entry(symbol, entry) for symbol, entry in payload.items()}
        logger.info("Loaded %d series from %s", len(series), self._path)
        return series

    def _parse_entry(self, symbol: str, entry: Any) -> DailyAssetSeries:
        if not isinstance(entry, dict):
            raise SeriesFileError(f"Series entry for {symbol} must be a JSON object.")

        try:
            if "total_volumes" in entry:
                return DailyAssetSeries.from_market_chart(symbol, entry)
            return DailyAssetSeries.from_columns(
                symbol,
                dates=entry["dates"],
                prices=entry["prices"],
                market_caps=entry.get("marketCaps", entry.get("market_caps")),
                volumes=entry["volumes"],
            )
        except KeyError as exc:
            raise SeriesFileError(f"Series entry for {symbol} is missing field {exc}") from exc
        except TypeError as exc:
            raise SeriesFileError(f"Series entry for {symbol} is malformed: {exc}") from exc
        except (ValidationError, ValueError) as exc:
            raise SeriesFileError(f"Series entry for {symbol} is invalid: {exc}") from exc

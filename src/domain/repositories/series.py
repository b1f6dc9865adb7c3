"""Series source interface.

AssetSeriesRepository is the engine's only input port: it yields one
DailyAssetSeries per symbol.  It does not extend a CRUD base because the
engine never writes series back; acquisition (fetching, caching, rate
limiting) lives entirely behind implementations of this interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from src.domain.models.market_data import DailyAssetSeries


class AssetSeriesRepository(ABC):
    """Read interface for per-asset daily histories."""

    @abstractmethod
    def load(self, symbols: Iterable[str] | None = None) -> dict[str, DailyAssetSeries]:
        """Return symbol → series.

        With symbols given, only those are returned; symbols the source does
        not know are silently absent from the result.  With None, every
        series the source holds is returned.
        """

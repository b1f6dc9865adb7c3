"""Market data domain models.

DailyBar         — one (date, price, market cap, volume) observation.
DailyAssetSeries — an asset's ordered daily history as supplied by the
                   data-acquisition layer.

Both are immutable value objects; the engine only ever reads them.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DailyBar(BaseModel):
    """A single daily observation for one asset (USD-denominated)."""

    model_config = ConfigDict(frozen=True)

    bar_date: date
    price: float = Field(ge=0.0)
    market_cap: float = Field(ge=0.0)
    volume: float = Field(ge=0.0)


class DailyAssetSeries(BaseModel):
    """An asset's daily history, strictly increasing by date.

    Gaps are allowed (the orchestrator carries values forward onto its master
    calendar); duplicates and out-of-order dates are construction errors.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str = Field(min_length=1)
    bars: tuple[DailyBar, ...] = ()

    @model_validator(mode="after")
    def _dates_strictly_increasing(self) -> DailyAssetSeries:
        for prev, cur in zip(self.bars, self.bars[1:]):
            if cur.bar_date <= prev.bar_date:
                raise ValueError(
                    f"Series for {self.symbol} must be strictly increasing by date: "
                    f"{cur.bar_date.isoformat()} follows {prev.bar_date.isoformat()}"
                )
        return self

    def __len__(self) -> int:
        return len(self.bars)

    @property
    def dates(self) -> list[date]:
        return [b.bar_date for b in self.bars]

    @property
    def prices(self) -> list[float]:
        return [b.price for b in self.bars]

    @property
    def market_caps(self) -> list[float]:
        return [b.market_cap for b in self.bars]

    @property
    def volumes(self) -> list[float]:
        return [b.volume for b in self.bars]

    @classmethod
    def from_columns(
        cls,
        symbol: str,
        dates: Sequence[date | str],
        prices: Sequence[float],
        market_caps: Sequence[float],
        volumes: Sequence[float],
    ) -> DailyAssetSeries:
        """Build a series from four parallel columns (the provider's wire shape).

        Raises ValueError when the columns differ in length.
        """
        lengths = {len(dates), len(prices), len(market_caps), len(volumes)}
        if len(lengths) != 1:
            raise ValueError(
                f"Column lengths differ for {symbol}: dates={len(dates)}, "
                f"prices={len(prices)}, market_caps={len(market_caps)}, volumes={len(volumes)}"
            )
        bars = tuple(
            DailyBar(bar_date=d, price=p, market_cap=m, volume=v)
            for d, p, m, v in zip(dates, prices, market_caps, volumes)
        )
        return cls(symbol=symbol, bars=bars)

    @classmethod
    def from_market_chart(cls, symbol: str, payload: dict) -> DailyAssetSeries:
        """Normalise a market-chart payload into one bar per UTC date.

        payload carries three arrays of [timestamp_ms, value] pairs under
        "prices", "market_caps" and "total_volumes".  When several samples
        fall on the same date the last one wins.  Dates missing any of the
        three values are dropped.
        """
        by_date: dict[date, dict[str, float]] = {}
        for key in ("prices", "market_caps", "total_volumes"):
            for timestamp_ms, value in payload.get(key, []):
                day = datetime.fromtimestamp(timestamp_ms / 1000.0, tz=timezone.utc).date()
                by_date.setdefault(day, {})[key] = float(value)

        bars = tuple(
            DailyBar(
                bar_date=day,
                price=values["prices"],
                market_cap=values["market_caps"],
                volume=values["total_volumes"],
            )
            for day, values in sorted(by_date.items())
            if len(values) == 3
        )
        return cls(symbol=symbol, bars=bars)

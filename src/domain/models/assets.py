"""Asset universe domain models.

These are pure domain objects: reference data loaded once and never
mutated by the engine.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .enums import AssetCategory


class AssetDefinition(BaseModel):
    """A candidate index constituent and its static attributes.

    The three compliance flags are attested outside the engine:
      launched_or_nexus            — launched on, or has a nexus to, the target chain
      primary_network              — the target chain is the principal venue
      has_unresolved_audit_finding — an unresolved critical audit finding exists
    compliance_last_verified is the date the flags were last checked; None
    when never verified.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str = Field(min_length=1)
    name: str
    coingecko_id: str = ""
    is_native: bool
    category: AssetCategory
    launched_or_nexus: bool = True
    primary_network: bool = True
    has_unresolved_audit_finding: bool = False
    contract_address: str = ""
    compliance_last_verified: date | None = None

    @property
    def asset_id(self) -> str:
        return f"asset-{self.symbol}"

    @property
    def is_lst(self) -> bool:
        return self.category == AssetCategory.LST


class AssetUniverse(BaseModel):
    """An ordered registry of AssetDefinitions keyed by symbol.

    Order is significant: it is the order assets appear in every screening
    snapshot and the tie-break order when market caps are equal.
    """

    model_config = ConfigDict(frozen=True)

    assets: tuple[AssetDefinition, ...] = ()

    @model_validator(mode="after")
    def _symbols_unique(self) -> AssetUniverse:
        seen: set[str] = set()
        duplicates = []
        for asset in self.assets:
            if asset.symbol in seen:
                duplicates.append(asset.symbol)
            seen.add(asset.symbol)
        if duplicates:
            raise ValueError(f"Duplicate asset symbols in universe: {sorted(set(duplicates))}")
        return self

    @classmethod
    def of(cls, assets: Iterable[AssetDefinition]) -> AssetUniverse:
        return cls(assets=tuple(assets))

    def __iter__(self) -> Iterator[AssetDefinition]:  # type: ignore[override]
        return iter(self.assets)

    def __len__(self) -> int:
        return len(self.assets)

    def __contains__(self, symbol: object) -> bool:
        return any(a.symbol == symbol for a in self.assets)

    def get(self, symbol: str) -> AssetDefinition | None:
        """Return the definition for symbol, or None if it is not registered."""
        for asset in self.assets:
            if asset.symbol == symbol:
                return asset
        return None

    def symbols(self) -> list[str]:
        return [a.symbol for a in self.assets]

    def by_coingecko_id(self, coingecko_id: str) -> AssetDefinition | None:
        for asset in self.assets:
            if asset.coingecko_id == coingecko_id:
                return asset
        return None

    def restricted_to(self, symbols: Iterable[str]) -> AssetUniverse:
        """Sub-universe of assets whose symbol is in symbols, order preserved."""
        keep = set(symbols)
        return AssetUniverse(assets=tuple(a for a in self.assets if a.symbol in keep))

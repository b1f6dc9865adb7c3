"""Time-stepped portfolio simulation.

Walks the trimmed calendar one day at a time:

    rebalance day (d % interval == 0), dynamic mode
        screen → select → allocate → shares = w / price → RebalanceEvent
    any other day, dynamic mode
        drift: value_i = shares_i · price_i,  w_i = value_i / Σ value
    fixed mode
        day 0 only: verbatim weights, one RebalanceEvent, then weights held
        constant (no drift, no further events)

The index level compounds the previous day's weights:

    NAV_0 = 100
    NAV_d = NAV_{d−1} · (1 + Σ_i w_i[d−1] · r_i[d])

An asset whose price is zero on d or d−1 contributes nothing that day.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date

import numpy as np

from src.domain.models.assets import AssetDefinition
from src.domain.models.backtest import BacktestConfig
from src.domain.models.enums import InclusionStatus
from src.domain.models.screening import RebalanceEvent, ScreeningRules, UniverseSnapshotItem

from .alignment import AlignedSeries
from .allocation import WeightAllocationService
from .screening import ScreeningService

logger = logging.getLogger(__name__)

_NAV_BASE = 100.0


@dataclass
class _Holding:
    symbol: str
    shares: float
    weight: float


@dataclass
class SimulationResult:
    """Raw simulator output, before the orchestrator assembles constituents.

    weight_history holds one array per simulated asset, zero on every date
    the asset was not held.
    """

    weight_history: dict[str, np.ndarray]
    rebalance_history: list[RebalanceEvent] = field(default_factory=list)
    nav: list[float] = field(default_factory=list)

    def held_symbols(self) -> list[str]:
        """Symbols that carried a positive weight on at least one date."""
        return [s for s, w in self.weight_history.items() if bool((w > 0.0).any())]


class PortfolioSimulator:
    """Runs the rebalance / drift loop and compounds the index NAV.

    Screening and allocation are delegated to their services; the simulator
    owns only the portfolio state for the duration of one run() call.
    """

    def __init__(
        self,
        screening: ScreeningService | None = None,
        allocation: WeightAllocationService | None = None,
    ) -> None:
        self._screening = screening or ScreeningService()
        self._allocation = allocation or WeightAllocationService()

    # ------------------------------------------------------------------ #
    # Public API                                                           #
    # ------------------------------------------------------------------ #

    def run(
        self,
        calendar: Sequence[date],
        aligned: Mapping[str, AlignedSeries],
        assets: Sequence[AssetDefinition],
        config: BacktestConfig,
        rules: ScreeningRules,
    ) -> SimulationResult:
        """Simulate the strategy over calendar.

        Args:
            calendar: trimmed master calendar.
            aligned: symbol → series aligned onto calendar.
            assets: the assets to simulate, in snapshot order; each must
                have an entry in aligned.
            config: strategy parameters.
            rules: screening rule parameters.
        """
        n_days = len(calendar)
        result = SimulationResult(weight_history={a.symbol: np.zeros(n_days) for a in assets})
        if n_days == 0:
            logger.warning("Empty calendar; nothing to simulate.")
            return result

        interval = config.rebalance_interval.days
        holdings: list[_Holding] = []

        for d, day in enumerate(calendar):
            if config.uses_fixed_weights:
                if d == 0:
                    holdings = self._construct_fixed(day, aligned, assets, config, result)
            elif d % interval == 0:
                holdings = self._rebalance(d, day, aligned, assets, config, rules, holdings, result)
            else:
                self._drift(holdings, aligned, d)

            for h in holdings:
                if h.symbol in result.weight_history:
                    result.weight_history[h.symbol][d] = h.weight

        result.nav = self._compound_nav(result.weight_history, aligned, n_days)
        return result

    # ------------------------------------------------------------------ #
    # Pipeline stages                                                      #
    # ------------------------------------------------------------------ #

    def _rebalance(
        self,
        d: int,
        day: date,
        aligned: Mapping[str, AlignedSeries],
        assets: Sequence[AssetDefinition],
        config: BacktestConfig,
        rules: ScreeningRules,
        holdings: list[_Holding],
        result: SimulationResult,
    ) -> list[_Holding]:
        market_data = {
            a.symbol: aligned[a.symbol].market_data(d, rules.volume_lookback_days)
            for a in assets
            if a.symbol in aligned
        }
        snapshot = self._screening.screen(day, assets, market_data, config.num_assets, rules)
        selected = self._screening.select(snapshot)
        weights = self._allocation.allocate(selected, config.max_weight)

        snapshot = [
            item.model_copy(update={"weight": weights[item.symbol]}) if item.symbol in weights else item
            for item in snapshot
        ]
        turnover = self._turnover(holdings, aligned, d, weights) if holdings else 0.0
        result.rebalance_history.append(
            RebalanceEvent(
                date=day,
                universe_snapshot=tuple(snapshot),
                total_mcap=sum(mcap for _, mcap in selected),
                turnover=turnover,
            )
        )
        logger.debug("Rebalance %s: %s (turnover %.4f)", day, weights, turnover)
        return self._buy(weights, aligned, d)

    def _construct_fixed(
        self,
        day: date,
        aligned: Mapping[str, AlignedSeries],
        assets: Sequence[AssetDefinition],
        config: BacktestConfig,
        result: SimulationResult,
    ) -> list[_Holding]:
        by_symbol = {a.symbol: a for a in assets}
        available = [s for s in by_symbol if s in aligned]
        weights = self._allocation.allocate_fixed(config.fixed_weights or {}, available)

        snapshot = []
        for symbol, weight in weights.items():
            asset, series = by_symbol[symbol], aligned[symbol]
            snapshot.append(
                UniverseSnapshotItem(
                    asset_id=asset.asset_id,
                    symbol=symbol,
                    name=asset.name,
                    price=float(series.prices[0]),
                    mcap=float(series.market_caps[0]),
                    avg_daily_vol=float(series.volumes[0]),
                    is_native=asset.is_native,
                    status=InclusionStatus.INCLUDED,
                    weight=weight,
                )
            )
        result.rebalance_history.append(
            RebalanceEvent(
                date=day,
                universe_snapshot=tuple(snapshot),
                total_mcap=sum(item.mcap for item in snapshot),
                turnover=0.0,
            )
        )
        logger.info("Fixed-weight portfolio constructed on %s: %s", day, weights)
        return self._buy(weights, aligned, 0)

    def _buy(self, weights: Mapping[str, float], aligned: Mapping[str, AlignedSeries], d: int) -> list[_Holding]:
        """Replace the portfolio; a zero price is treated as 1."""
        holdings = []
        for symbol, weight in weights.items():
            price = float(aligned[symbol].prices[d]) or 1.0
            holdings.append(_Holding(symbol=symbol, shares=weight / price, weight=weight))
        return holdings

    def _drift(self, holdings: list[_Holding], aligned: Mapping[str, AlignedSeries], d: int) -> None:
        values = self._values(holdings, aligned, d)
        total = sum(values)
        for h, value in zip(holdings, values):
            h.weight = value / total if total > 0.0 else 0.0

    def _values(self, holdings: list[_Holding], aligned: Mapping[str, AlignedSeries], d: int) -> list[float]:
        return [h.shares * (float(aligned[h.symbol].prices[d]) or 1.0) for h in holdings]

    def _turnover(
        self,
        holdings: list[_Holding],
        aligned: Mapping[str, AlignedSeries],
        d: int,
        new_weights: Mapping[str, float],
    ) -> float:
        """One-way turnover against the weights drifted to day d's prices."""
        values = self._values(holdings, aligned, d)
        total = sum(values)
        held = {h.symbol: (v / total if total > 0.0 else 0.0) for h, v in zip(holdings, values)}
        symbols = set(held) | set(new_weights)
        return 0.5 * sum(abs(new_weights.get(s, 0.0) - held.get(s, 0.0)) for s in symbols)

    def _compound_nav(
        self,
        weight_history: Mapping[str, np.ndarray],
        aligned: Mapping[str, AlignedSeries],
        n_days: int,
    ) -> list[float]:
        portfolio_returns = np.zeros(max(0, n_days - 1))
        for symbol, weights in weight_history.items():
            prices = aligned[symbol].prices
            prev, cur = prices[:-1], prices[1:]
            valid = (prev != 0.0) & (cur != 0.0)
            returns = np.where(valid, cur / np.where(prev != 0.0, prev, 1.0) - 1.0, 0.0)
            portfolio_returns += weights[:-1] * returns

        nav = [_NAV_BASE]
        for r in portfolio_returns:
            nav.append(nav[-1] * (1.0 + float(r)))
        return nav

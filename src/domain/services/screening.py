"""Constituent screening service.

Classifies every asset of the universe on one evaluation date.

Rule table, applied in order; the FIRST failing rule decides the status and
later rules are not reported:
    1. excluded category, or the benchmark symbol   → REJECTED_CATEGORY
    2. not launched on / no nexus to the chain      → REJECTED_LAUNCH
    3. chain is not the primary network             → REJECTED_PRIMARY_NETWORK
    4. not native                                   → REJECTED_NATIVE
    5. trailing avg daily volume below the floor    → REJECTED_VOL
    6. unresolved critical audit finding            → REJECTED_AUDIT
An asset with no market data for the date is REJECTED_VOL outright.

Post-passes over the tentatively INCLUDED set:
    LST cap — keep the max_lst_positions largest liquid-staking tokens by
              market cap, the rest become REJECTED_CATEGORY.
    Rank    — keep the top N by market cap, the rest become REJECTED_RANK.
Market-cap ties keep universe order (stable sort).

Pipeline:
    screen
        → _evaluate            (rule table per asset)
        → _apply_lst_cap
        → _apply_rank_cut
        → _build_snapshot      (→ UniverseSnapshotItem, universe order)
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date

from src.domain.models.assets import AssetDefinition
from src.domain.models.enums import DiscrepancySeverity, DiscrepancyType, InclusionStatus
from src.domain.models.screening import (
    DataDiscrepancy,
    MarketDataPoint,
    ScreeningRules,
    UniverseSnapshotItem,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Rule:
    """One row of the rule table: the asset fails when `fails` returns True."""

    fails: Callable[[AssetDefinition, MarketDataPoint, ScreeningRules], bool]
    status: InclusionStatus
    reason: Callable[[AssetDefinition, MarketDataPoint, ScreeningRules], str]


def _category_reason(asset: AssetDefinition, _: MarketDataPoint, rules: ScreeningRules) -> str:
    if asset.symbol == rules.benchmark_symbol:
        return f"{asset.symbol} is used as benchmark, not included in index"
    return f"Asset category '{asset.category.value}' is excluded"


def _volume_reason(_: AssetDefinition, data: MarketDataPoint, rules: ScreeningRules) -> str:
    return (
        f"Failed volume criterion: ${data.avg_daily_vol:,.0f} average daily volume "
        f"< ${rules.min_avg_daily_volume_usd:,.0f} threshold"
    )


_RULES: tuple[_Rule, ...] = (
    _Rule(
        fails=lambda a, _, r: a.category in r.excluded_categories or a.symbol == r.benchmark_symbol,
        status=InclusionStatus.REJECTED_CATEGORY,
        reason=_category_reason,
    ),
    _Rule(
        fails=lambda a, _, __: not a.launched_or_nexus,
        status=InclusionStatus.REJECTED_LAUNCH,
        reason=lambda *_: "Failed launch criterion: did not launch on the chain or have a nexus to it",
    ),
    _Rule(
        fails=lambda a, _, __: not a.primary_network,
        status=InclusionStatus.REJECTED_PRIMARY_NETWORK,
        reason=lambda *_: "Failed primary-network criterion: chain is not the principal venue for liquidity/activity",
    ),
    _Rule(
        fails=lambda a, _, __: not a.is_native,
        status=InclusionStatus.REJECTED_NATIVE,
        reason=lambda *_: "Asset is not native to the chain",
    ),
    _Rule(
        fails=lambda _, d, r: d.avg_daily_vol < r.min_avg_daily_volume_usd,
        status=InclusionStatus.REJECTED_VOL,
        reason=_volume_reason,
    ),
    _Rule(
        fails=lambda a, _, __: a.has_unresolved_audit_finding,
        status=InclusionStatus.REJECTED_AUDIT,
        reason=lambda *_: "Failed audit criterion: unresolved critical-severity audit findings",
    ),
)

_NO_DATA = MarketDataPoint(price=0.0, mcap=0.0, avg_daily_vol=0.0)


@dataclass
class _Evaluation:
    """Mutable working row; frozen into a UniverseSnapshotItem at the end."""

    asset: AssetDefinition
    data: MarketDataPoint
    status: InclusionStatus
    reason: str | None
    flags: list[DataDiscrepancy] = field(default_factory=list)


class ScreeningService:
    """Pure computation service classifying the universe on one date.

    The class is stateless; rules and the target count are passed per-call.
    """

    # ------------------------------------------------------------------ #
    # Public API                                                           #
    # ------------------------------------------------------------------ #

    def screen(
        self,
        evaluation_date: date,
        assets: Iterable[AssetDefinition],
        market_data: Mapping[str, MarketDataPoint],
        num_assets: int,
        rules: ScreeningRules | None = None,
    ) -> list[UniverseSnapshotItem]:
        """Screen every asset and return one snapshot row per asset.

        Args:
            evaluation_date: date being screened, reported in the debug log;
                market_data must already hold the values for that date.
            assets: the universe, in snapshot order.
            market_data: symbol → MarketDataPoint for evaluation_date.
            num_assets: target constituent count N.
            rules: rule parameters; ScreeningRules.default() when None.

        Returns:
            list[UniverseSnapshotItem] in universe order, all weights 0.0.
        """
        rules = rules or ScreeningRules.default()
        evaluations = [self._evaluate(asset, market_data.get(asset.symbol), rules) for asset in assets]
        self._apply_lst_cap(evaluations, rules.max_lst_positions)
        self._apply_rank_cut(evaluations, num_assets)
        logger.debug(
            "Screened %d assets on %s: %d included.",
            len(evaluations),
            evaluation_date,
            sum(1 for e in evaluations if e.status == InclusionStatus.INCLUDED),
        )
        return self._build_snapshot(evaluations)

    def select(self, snapshot: Iterable[UniverseSnapshotItem]) -> list[tuple[str, float]]:
        """(symbol, market cap) of the INCLUDED rows, largest market cap first."""
        included = [item for item in snapshot if item.is_included]
        included.sort(key=lambda item: item.mcap, reverse=True)
        return [(item.symbol, item.mcap) for item in included]

    def rejection_summary(self, snapshot: Iterable[UniverseSnapshotItem]) -> dict[InclusionStatus, int]:
        """Count of snapshot rows per status (every status present, zeros included)."""
        counts = Counter(item.status for item in snapshot)
        return {status: counts.get(status, 0) for status in InclusionStatus}

    # ------------------------------------------------------------------ #
    # Pipeline stages                                                      #
    # ------------------------------------------------------------------ #

    def _evaluate(
        self,
        asset: AssetDefinition,
        data: MarketDataPoint | None,
        rules: ScreeningRules,
    ) -> _Evaluation:
        if data is None:
            return _Evaluation(
                asset=asset,
                data=_NO_DATA,
                status=InclusionStatus.REJECTED_VOL,
                reason="No market data available",
            )

        status, reason = InclusionStatus.INCLUDED, None
        for rule in _RULES:
            if rule.fails(asset, data, rules):
                status, reason = rule.status, rule.reason(asset, data, rules)
                break

        return _Evaluation(
            asset=asset,
            data=data,
            status=status,
            reason=reason,
            flags=self.data_quality_flags(data, rules),
        )

    def _apply_lst_cap(self, evaluations: list[_Evaluation], max_lst_positions: int) -> None:
        lsts = [e for e in evaluations if e.status == InclusionStatus.INCLUDED and e.asset.is_lst]
        if len(lsts) <= max_lst_positions:
            return
        lsts.sort(key=lambda e: e.data.mcap, reverse=True)
        for e in lsts[max_lst_positions:]:
            e.status = InclusionStatus.REJECTED_CATEGORY
            e.reason = f"Only {max_lst_positions} LST position(s) allowed per basket"

    def _apply_rank_cut(self, evaluations: list[_Evaluation], num_assets: int) -> None:
        passing = [e for e in evaluations if e.status == InclusionStatus.INCLUDED]
        passing.sort(key=lambda e: e.data.mcap, reverse=True)
        for e in passing[num_assets:]:
            e.status = InclusionStatus.REJECTED_RANK
            e.reason = f"Outside top {num_assets} by market cap"

    def _build_snapshot(self, evaluations: list[_Evaluation]) -> list[UniverseSnapshotItem]:
        return [
            UniverseSnapshotItem(
                asset_id=e.asset.asset_id,
                symbol=e.asset.symbol,
                name=e.asset.name,
                price=e.data.price,
                mcap=e.data.mcap,
                avg_daily_vol=e.data.avg_daily_vol,
                is_native=e.asset.is_native,
                status=e.status,
                weight=0.0,
                audit_flags=tuple(e.flags),
                rejection_reason=e.reason,
            )
            for e in evaluations
        ]

    # ------------------------------------------------------------------ #
    # Data-quality flags                                                   #
    # ------------------------------------------------------------------ #

    def data_quality_flags(self, data: MarketDataPoint, rules: ScreeningRules) -> list[DataDiscrepancy]:
        """Deterministic flags for values the inclusion decision is sensitive to.

        VOLUME_threshold_conflict — average volume within ±band of the floor,
                                    so a small revision would flip the decision.
        STALE_data                — the date's values were carried forward.
        """
        flags: list[DataDiscrepancy] = []
        threshold = rules.min_avg_daily_volume_usd
        band = rules.volume_conflict_band * threshold
        if band > 0.0 and threshold - band < data.avg_daily_vol < threshold + band:
            flags.append(
                DataDiscrepancy(
                    type=DiscrepancyType.VOLUME_THRESHOLD_CONFLICT,
                    severity=DiscrepancySeverity.CRITICAL,
                    description=(
                        f"Average daily volume ${data.avg_daily_vol:,.0f} is within "
                        f"{rules.volume_conflict_band:.0%} of the ${threshold:,.0f} threshold."
                    ),
                    provider_values={"observed": data.avg_daily_vol, "threshold": threshold},
                    contested=True,
                )
            )
        if data.is_stale:
            flags.append(
                DataDiscrepancy(
                    type=DiscrepancyType.STALE_DATA,
                    severity=DiscrepancySeverity.LOW,
                    description="No observation on this date; values carried forward.",
                )
            )
        return flags

"""Constituent weight allocation service.

Dynamic (market-cap) mode:
    raw_i    = mcap_i / Σ mcap
    capped   = {i | raw_i > c}                    c = max_weight
    surplus  = Σ_{i ∈ capped} (raw_i − c)
    w_i      = c                                  i ∈ capped
             = raw_i + surplus / |uncapped|       otherwise

Redistribution is a single equal-share pass.  An uncapped asset pushed above
c by its share of the surplus is NOT clipped again, so weights can exceed
max_weight after redistribution.  When every asset is capped there is nowhere to put the surplus
and the weights sum to N·c < 1.  min_weight is advisory and not enforced.

Fixed mode:
    weights are taken verbatim from the caller's map (restricted to symbols
    that have data); no normalisation and no capping.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass, replace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _WeightDraft:
    """Intermediate weight for one asset between clipping and redistribution."""

    symbol: str
    raw_weight: float
    weight: float
    capped: bool


class WeightAllocationService:
    """Pure computation service turning a selection into target weights.

    The class is stateless; all parameters are passed per-call.
    """

    def allocate(
        self,
        selected: Sequence[tuple[str, float]],
        max_weight: float,
    ) -> dict[str, float]:
        """Market-cap weights with max-weight clipping and one redistribution pass.

        Args:
            selected: (symbol, market cap) pairs for the included constituents,
                in selection order.
            max_weight: per-asset cap c applied to the raw market-cap weights.

        Returns:
            symbol → weight in selection order; empty when nothing is selected
            or the selection has no market cap at all.
        """
        total_mcap = sum(mcap for _, mcap in selected)
        if not selected or total_mcap <= 0.0:
            if selected:
                logger.warning(
                    "Selected constituents %s have zero total market cap; no weights assigned.",
                    [symbol for symbol, _ in selected],
                )
            return {}

        drafts = self._clip(selected, total_mcap, max_weight)
        drafts = self._redistribute(drafts, max_weight)
        return {d.symbol: d.weight for d in drafts}

    def allocate_fixed(
        self,
        fixed_weights: Mapping[str, float],
        available_symbols: Collection[str],
    ) -> dict[str, float]:
        """Verbatim fixed weights for every symbol that has market data."""
        missing = [s for s in fixed_weights if s not in available_symbols]
        if missing:
            logger.warning("Fixed-weight symbols without market data are skipped: %s", missing)
        return {s: w for s, w in fixed_weights.items() if s in available_symbols}

    # ------------------------------------------------------------------ #
    # Pipeline stages                                                      #
    # ------------------------------------------------------------------ #

    def _clip(
        self,
        selected: Sequence[tuple[str, float]],
        total_mcap: float,
        max_weight: float,
    ) -> list[_WeightDraft]:
        drafts: list[_WeightDraft] = []
        for symbol, mcap in selected:
            raw = mcap / total_mcap
            if raw > max_weight:
                drafts.append(_WeightDraft(symbol, raw, max_weight, capped=True))
            else:
                drafts.append(_WeightDraft(symbol, raw, raw, capped=False))
        return drafts

    def _redistribute(self, drafts: list[_WeightDraft], max_weight: float) -> list[_WeightDraft]:
        """Spread the clipped surplus equally over the uncapped assets, once."""
        surplus = sum(d.raw_weight - max_weight for d in drafts if d.capped)
        if surplus <= 0.0:
            return drafts

        uncapped = sum(1 for d in drafts if not d.capped)
        if uncapped == 0:
            return drafts

        share = surplus / uncapped
        return [d if d.capped else replace(d, weight=d.weight + share) for d in drafts]

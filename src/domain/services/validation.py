"""Rebalance audit service.

Re-checks recorded rebalance events against the asset definitions, so a
stored history can be audited after the definitions change, and reports
which assets currently satisfy the static selection criteria.

Checks per INCLUDED snapshot row (all failures are reported, not just the
first):
    Definition          — symbol missing from the universe
    Launch / nexus      — launched_or_nexus is False
    Primary network     — primary_network is False
    Volume              — recorded avg_daily_vol below the floor
    Audit               — unresolved critical audit finding
    Category exclusion  — category in the excluded set
    Native              — is_native is False
Basket-level checks:
    LST limit           — more LSTs than max_lst_positions
    Benchmark exclusion — the benchmark symbol is included
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, timedelta

from src.domain.models.assets import AssetDefinition, AssetUniverse
from src.domain.models.screening import RebalanceEvent, ScreeningRules
from src.domain.models.validation import (
    ComplianceIssue,
    ComplianceReport,
    HistoryValidation,
    RebalanceValidation,
    RuleViolation,
)

logger = logging.getLogger(__name__)

COMPLIANCE_MAX_AGE = timedelta(days=30)


class RebalanceValidationService:
    """Pure computation service auditing rebalance events and the universe."""

    # ------------------------------------------------------------------ #
    # Public API                                                           #
    # ------------------------------------------------------------------ #

    def validate_event(
        self,
        event: RebalanceEvent,
        universe: AssetUniverse,
        rules: ScreeningRules | None = None,
        as_of: date | None = None,
    ) -> RebalanceValidation:
        """Audit one rebalance event.

        as_of anchors the compliance-freshness warning and defaults to the
        event date.
        """
        rules = rules or ScreeningRules.default()
        violations: list[RuleViolation] = []
        included = event.included

        for item in included:
            asset = universe.get(item.symbol)
            if asset is None:
                violations.append(
                    RuleViolation(
                        symbol=item.symbol,
                        criterion="Definition",
                        reason="Asset not found in the universe definition table",
                    )
                )
                continue
            violations.extend(self._asset_violations(asset, item.avg_daily_vol, rules))

        violations.extend(self._basket_violations([item.symbol for item in included], universe, rules))

        warnings = self._freshness_warnings(universe, as_of or event.date)
        return RebalanceValidation.create(
            date=event.date,
            included_assets=[item.symbol for item in included],
            violations=violations,
            warnings=warnings,
        )

    def validate_history(
        self,
        events: Iterable[RebalanceEvent],
        universe: AssetUniverse,
        rules: ScreeningRules | None = None,
        as_of: date | None = None,
    ) -> HistoryValidation:
        results = [self.validate_event(e, universe, rules, as_of) for e in events]
        summary = HistoryValidation.from_results(results)
        if not summary.all_valid:
            logger.warning(
                "%d of %d rebalance events break selection rules (%d violations).",
                summary.invalid_events,
                summary.total_events,
                summary.total_violations,
            )
        return summary

    def compliance_report(
        self,
        universe: AssetUniverse,
        rules: ScreeningRules | None = None,
    ) -> ComplianceReport:
        """Partition the universe by its static attestations.

        The benchmark and excluded categories are not part of the report.
        """
        rules = rules or ScreeningRules.default()
        compliant: list[str] = []
        non_compliant: list[ComplianceIssue] = []

        for asset in universe:
            if asset.symbol == rules.benchmark_symbol or asset.category in rules.excluded_categories:
                continue
            issues = []
            if not asset.launched_or_nexus:
                issues.append("Missing launch-or-nexus verification")
            if not asset.primary_network:
                issues.append("Missing primary-network verification")
            if asset.has_unresolved_audit_finding:
                issues.append("Has unresolved critical audit findings")
            if not asset.is_native:
                issues.append("Not marked as native to the chain")

            if issues:
                non_compliant.append(ComplianceIssue(symbol=asset.symbol, issues=tuple(issues)))
            else:
                compliant.append(asset.symbol)

        return ComplianceReport(compliant_assets=tuple(compliant), non_compliant_assets=tuple(non_compliant))

    # ------------------------------------------------------------------ #
    # Checks                                                               #
    # ------------------------------------------------------------------ #

    def _asset_violations(
        self,
        asset: AssetDefinition,
        avg_daily_vol: float,
        rules: ScreeningRules,
    ) -> list[RuleViolation]:
        symbol = asset.symbol
        found: list[tuple[str, str]] = []
        if not asset.launched_or_nexus:
            found.append(("Launch / nexus", "Asset did not launch on the chain or have a nexus to it"))
        if not asset.primary_network:
            found.append(("Primary network", "Chain is not the principal venue for liquidity/activity"))
        if avg_daily_vol < rules.min_avg_daily_volume_usd:
            found.append(
                (
                    "Volume",
                    f"Volume ${avg_daily_vol:,.0f} is below ${rules.min_avg_daily_volume_usd:,.0f} threshold",
                )
            )
        if asset.has_unresolved_audit_finding:
            found.append(("Audit", "Asset has unresolved critical-severity audit findings"))
        if asset.category in rules.excluded_categories:
            found.append(("Category exclusion", f"Category '{asset.category.value}' is not allowed in the basket"))
        if not asset.is_native:
            found.append(("Native", "Asset is not native to the chain"))
        return [RuleViolation(symbol=symbol, criterion=c, reason=r) for c, r in found]

    def _basket_violations(
        self,
        included: list[str],
        universe: AssetUniverse,
        rules: ScreeningRules,
    ) -> list[RuleViolation]:
        violations = []
        lsts = [s for s in included if (asset := universe.get(s)) is not None and asset.is_lst]
        if len(lsts) > rules.max_lst_positions:
            violations.append(
                RuleViolation(
                    symbol=", ".join(lsts),
                    criterion="LST limit",
                    reason=f"Found {len(lsts)} LST positions, maximum is {rules.max_lst_positions}",
                )
            )
        if rules.benchmark_symbol in included:
            violations.append(
                RuleViolation(
                    symbol=rules.benchmark_symbol,
                    criterion="Benchmark exclusion",
                    reason=f"{rules.benchmark_symbol} is the benchmark and must not be included in the index",
                )
            )
        return violations

    def _freshness_warnings(self, universe: AssetUniverse, as_of: date) -> list[str]:
        cutoff = as_of - COMPLIANCE_MAX_AGE
        stale = [
            a.symbol
            for a in universe
            if a.compliance_last_verified is None or a.compliance_last_verified < cutoff
        ]
        if not stale:
            return []
        return [f"{len(stale)} asset(s) have stale or missing compliance verification dates"]

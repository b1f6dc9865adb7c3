"""Rebalance audit and compliance domain models.

RebalanceValidation is an aggregate of RuleViolations for one rebalance
event; is_valid is derived from the violations on construction via create().
HistoryValidation rolls many event validations into a summary.
ComplianceReport partitions the universe into compliant / non-compliant
assets on their static attestations alone.
"""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RuleViolation(BaseModel):
    """One included constituent that breaks one selection rule.

    symbol may list several comma-separated symbols for basket-level rules
    (e.g. the LST limit).
    """

    model_config = ConfigDict(frozen=True)

    symbol: str
    criterion: str
    reason: str


class RebalanceValidation(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: dt.date
    is_valid: bool
    included_assets: tuple[str, ...] = ()
    violations: tuple[RuleViolation, ...] = ()
    warnings: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _validity_consistent(self) -> RebalanceValidation:
        if self.is_valid == bool(self.violations):
            raise ValueError(
                f"is_valid={self.is_valid} is inconsistent with "
                f"{len(self.violations)} violation(s)"
            )
        return self

    @classmethod
    def create(
        cls,
        date: dt.date,
        included_assets: list[str],
        violations: list[RuleViolation],
        warnings: list[str],
    ) -> RebalanceValidation:
        return cls(
            date=date,
            is_valid=not violations,
            included_assets=tuple(included_assets),
            violations=tuple(violations),
            warnings=tuple(warnings),
        )


class HistoryValidation(BaseModel):
    model_config = ConfigDict(frozen=True)

    results: tuple[RebalanceValidation, ...] = ()
    total_events: int = Field(ge=0)
    valid_events: int = Field(ge=0)
    invalid_events: int = Field(ge=0)
    total_violations: int = Field(ge=0)

    @property
    def all_valid(self) -> bool:
        return self.invalid_events == 0

    @classmethod
    def from_results(cls, results: list[RebalanceValidation]) -> HistoryValidation:
        valid = sum(1 for r in results if r.is_valid)
        return cls(
            results=tuple(results),
            total_events=len(results),
            valid_events=valid,
            invalid_events=len(results) - valid,
            total_violations=sum(len(r.violations) for r in results),
        )


class ComplianceIssue(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str
    issues: tuple[str, ...]


class ComplianceReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    compliant_assets: tuple[str, ...] = ()
    non_compliant_assets: tuple[ComplianceIssue, ...] = ()

    @property
    def total(self) -> int:
        return len(self.compliant_assets) + len(self.non_compliant_assets)

    @property
    def compliant(self) -> int:
        return len(self.compliant_assets)

    @property
    def non_compliant(self) -> int:
        return len(self.non_compliant_assets)

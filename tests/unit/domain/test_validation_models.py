"""Tests for src/domain/models/validation.py."""

from datetime import date

import pytest
from pydantic import ValidationError

from src.domain.models.validation import (
    ComplianceIssue,
    ComplianceReport,
    HistoryValidation,
    RebalanceValidation,
    RuleViolation,
)

_D = date(2024, 1, 1)
_VIOLATION = RuleViolation(symbol="SOL", criterion="Benchmark exclusion", reason="benchmark included")


def test_create_without_violations_is_valid():
    v = RebalanceValidation.create(_D, ["JUP"], [], [])
    assert v.is_valid is True
    assert v.included_assets == ("JUP",)


def test_create_with_violations_is_invalid():
    v = RebalanceValidation.create(_D, ["SOL"], [_VIOLATION], ["stale"])
    assert v.is_valid is False
    assert v.warnings == ("stale",)


def test_inconsistent_is_valid_raises():
    with pytest.raises(ValidationError):
        RebalanceValidation(date=_D, is_valid=True, violations=(_VIOLATION,))


def test_history_from_results_counts():
    ok = RebalanceValidation.create(_D, [], [], [])
    bad = RebalanceValidation.create(_D, [], [_VIOLATION, _VIOLATION], [])
    h = HistoryValidation.from_results([ok, bad, ok])
    assert h.total_events == 3
    assert h.valid_events == 2
    assert h.invalid_events == 1
    assert h.total_violations == 2
    assert h.all_valid is False


def test_history_empty_is_all_valid():
    assert HistoryValidation.from_results([]).all_valid is True


def test_compliance_report_counts():
    report = ComplianceReport(
        compliant_assets=("JUP", "RAY"),
        non_compliant_assets=(ComplianceIssue(symbol="X", issues=("Not native",)),),
    )
    assert report.total == 3
    assert report.compliant == 2
    assert report.non_compliant == 1

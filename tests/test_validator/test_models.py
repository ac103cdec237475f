"""Tests for ValidationReport behaviour, rendering and serialization."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from gateway.validator.models import (
    Dimension,
    Finding,
    ReportStatus,
    Severity,
    ValidationContext,
    ValidationReport,
)


def _finding(
    severity: Severity = Severity.WARNING,
    dimension: Dimension | None = Dimension.FOUNDATIONS,
    message: str = "Test finding",
    **kwargs,
) -> Finding:
    return Finding(dimension=dimension, severity=severity, message=message, **kwargs)


def _report(*findings: Finding, **kwargs) -> ValidationReport:
    return ValidationReport(content_name="Test Report", findings=findings, **kwargs)


class TestViable:
    def test_warning_is_viable(self) -> None:
        assert _report(_finding(Severity.WARNING)).viable() is True

    def test_zombie_is_viable(self) -> None:
        assert _report(_finding(Severity.ZOMBIE)).viable() is True

    def test_fail_is_not_viable(self) -> None:
        assert _report(_finding(Severity.FAIL, Dimension.SCIENTIFIC)).viable() is False

    def test_nullity_is_not_viable(self) -> None:
        assert _report(_finding(Severity.NULLITY)).viable() is False

    def test_empty_is_viable(self) -> None:
        assert _report().viable() is True


class TestViolationRate:
    def test_zero_without_findings(self) -> None:
        assert _report().violation_rate == 0.0

    def test_counts_warnings_and_fails_only(self) -> None:
        report = _report(
            _finding(Severity.WARNING),
            _finding(Severity.FAIL),
            _finding(Severity.ZOMBIE),
            _finding(Severity.PASS, dimension=None),
        )
        assert report.violation_rate == pytest.approx(2 / 4)


class TestStatus:
    @pytest.mark.parametrize(
        ("findings", "flags", "expected"),
        [
            ((), {}, ReportStatus.PASS),
            ((_finding(Severity.WARNING),), {}, ReportStatus.WARNING),
            ((_finding(Severity.FAIL),), {}, ReportStatus.FAIL),
            ((_finding(Severity.ZOMBIE),), {"is_zombie": True}, ReportStatus.ZOMBIE),
            ((_finding(Severity.FAIL),), {"is_nullity": True}, ReportStatus.NULLITY),
        ],
    )
    def test_precedence(self, findings, flags, expected) -> None:
        assert _report(*findings, **flags).status == expected


class TestImmutability:
    def test_report_is_frozen(self) -> None:
        report = _report()
        with pytest.raises(ValidationError):
            report.score = 0.1

    def test_finding_is_frozen(self) -> None:
        finding = _finding()
        with pytest.raises(ValidationError):
            finding.message = "changed"

    def test_score_outside_unit_interval_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ValidationReport(score=1.5)


class TestSummary:
    def test_contains_name_and_score(self) -> None:
        summary = _report(score=0.85).summary()
        assert "MVT Validation Report" in summary
        assert "Test Report" in summary
        assert "0.850" in summary

    def test_violation_rate_percentage(self) -> None:
        summary = _report(_finding(Severity.WARNING), _finding(Severity.PASS)).summary()
        assert "50.0%" in summary

    @pytest.mark.parametrize(
        ("report", "marker"),
        [
            (_report(is_nullity=True), "NULLITY"),
            (_report(_finding(Severity.ZOMBIE), is_zombie=True), "ZOMBIE"),
            (_report(), "PASS ✓"),
            (_report(_finding(Severity.WARNING)), "with warnings"),
            (_report(_finding(Severity.FAIL)), "DOA"),
        ],
    )
    def test_status_line(self, report: ValidationReport, marker: str) -> None:
        assert marker in report.summary()

    def test_sections_follow_dimension_order(self) -> None:
        report = _report(
            _finding(dimension=Dimension.SCIENTIFIC, message="sci"),
            _finding(dimension=Dimension.FOUNDATIONS, message="found-1"),
            _finding(dimension=Dimension.FOUNDATIONS, message="found-2"),
        )
        summary = report.summary()
        assert summary.index("## Foundations") < summary.index("## Scientific Integrity")
        assert summary.index("found-1") < summary.index("found-2")
        assert "## Inference Logic" not in summary

    def test_evidence_is_truncated(self) -> None:
        evidence = "x" * 120
        summary = _report(_finding(evidence=evidence)).summary()
        assert f"`{'x' * 80}...`" in summary
        assert "x" * 81 not in summary

    def test_short_evidence_is_kept(self) -> None:
        summary = _report(_finding(evidence="obviously")).summary()
        assert "> `obviously`" in summary

    def test_principle_and_case_labels(self) -> None:
        summary = _report(_finding(principle="I", case_study="Priming")).summary()
        assert "[Principle I]" in summary
        assert "[Case: Priming]" in summary

    def test_ai_summary_section(self) -> None:
        summary = _report(_finding(Severity.PASS, dimension=None, message="Looks fine")).summary()
        assert "## AI Summary" in summary
        assert "Looks fine" in summary

    def test_is_deterministic(self) -> None:
        report = _report(_finding(), _finding(Severity.FAIL, Dimension.SCIENTIFIC))
        assert report.summary() == report.summary()


class TestToDict:
    def test_structured_form(self) -> None:
        report = _report(
            _finding(Severity.WARNING, evidence="obviously", principle="I"),
            score=0.9,
        )
        data = report.to_dict()
        assert data["content_name"] == "Test Report"
        assert data["score"] == 0.9
        assert data["is_viable"] is True
        assert data["is_zombie"] is False
        assert data["is_nullity"] is False
        assert data["violation_rate"] == 1.0
        assert data["status"] == "warning"
        finding = data["findings"][0]
        assert finding["dimension"] == "Foundations"
        assert finding["severity"] == "warning"
        assert finding["symbol"] == "⚠"
        assert finding["evidence"] == "obviously"

    def test_context_api_key_is_never_serialized(self) -> None:
        context = ValidationContext(name="x", api_key="secret")
        assert "api_key" not in context.model_dump()
        assert "secret" not in repr(context)

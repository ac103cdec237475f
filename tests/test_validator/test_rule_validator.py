"""Tests for RuleBasedValidator end to end."""

from __future__ import annotations

import pytest

from gateway.validator.engine import RuleBasedValidator
from gateway.validator.models import Dimension, Severity, ValidationContext


@pytest.fixture
def validator() -> RuleBasedValidator:
    return RuleBasedValidator()


class TestRun:
    def test_clean_content_is_perfect(self, validator: RuleBasedValidator, clean_text: str) -> None:
        report = validator.run(clean_text, ValidationContext(name="Clean Content"))
        assert report.content_name == "Clean Content"
        assert report.findings == ()
        assert report.score == 1.0
        assert report.viable() is True
        assert report.is_nullity is False
        assert report.is_zombie is False
        assert report.source == "rules"

    def test_empty_content_is_perfect(self, validator: RuleBasedValidator) -> None:
        report = validator.run("")
        assert report.score == 1.0
        assert report.findings == ()
        assert report.viable() is True
        assert report.content_name == "Unknown"

    def test_hidden_assumptions(self, validator: RuleBasedValidator, warning_text: str) -> None:
        report = validator.run(warning_text)
        assert any(
            f.dimension == Dimension.FOUNDATIONS and f.severity == Severity.WARNING
            for f in report.findings
        )
        assert 0.0 < report.score < 1.0
        assert report.viable() is True

    def test_unfalsifiable_is_not_viable(
        self, validator: RuleBasedValidator, unfalsifiable_text: str,
    ) -> None:
        report = validator.run(unfalsifiable_text)
        assert any(
            f.dimension == Dimension.SCIENTIFIC and f.severity == Severity.FAIL
            for f in report.findings
        )
        assert report.viable() is False

    def test_zombie_candidate(self, validator: RuleBasedValidator) -> None:
        report = validator.run(
            "The correlation between A and B demonstrates that A causes B. "
            "This elegant theory is theoretically valid."
        )
        assert any(f.severity == Severity.ZOMBIE for f in report.findings)

    def test_case_findings_follow_rule_findings(self, validator: RuleBasedValidator) -> None:
        report = validator.run("Obviously the correlation causes churn.")
        assert report.findings[0].case_study is None
        assert report.findings[-1].case_study == "Priming (Hidden Variable)"

    def test_three_fails_is_nullity(self, validator: RuleBasedValidator) -> None:
        text = (
            "It cannot be tested. It cannot be verified. It cannot be falsified. "
            "The correlation causes results."
        )
        report = validator.run(text)
        assert sum(1 for f in report.findings if f.severity == Severity.FAIL) == 3
        assert report.is_nullity is True
        assert report.is_zombie is False

    def test_is_idempotent(self, validator: RuleBasedValidator, warning_text: str) -> None:
        first = validator.run(warning_text)
        second = validator.run(warning_text)
        assert first.findings == second.findings
        assert first.score == second.score
        assert (first.is_zombie, first.is_nullity) == (second.is_zombie, second.is_nullity)

    def test_tau_controls_zombie_flag(self) -> None:
        text = "An elegant theory."
        assert RuleBasedValidator(tau=0.5).run(text).is_zombie is True
        assert RuleBasedValidator(tau=0.9).run(text).is_zombie is False

    def test_per_call_tau_overrides_constructor(self) -> None:
        text = "An elegant theory."
        assert RuleBasedValidator(tau=0.5).run(text, tau=0.9).is_zombie is False
        assert RuleBasedValidator(tau=0.9).run(text, tau=0.5).is_zombie is True


@pytest.mark.asyncio
async def test_validate_matches_run(validator: RuleBasedValidator, warning_text: str) -> None:
    report = await validator.validate(warning_text)
    assert report.findings == validator.run(warning_text).findings

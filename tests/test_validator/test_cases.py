"""Tests for the case template matcher."""

from __future__ import annotations

from gateway.validator.cases import CASE_TEMPLATES, match_case_templates
from gateway.validator.models import Dimension, Severity


def test_catalog_is_static() -> None:
    names = [t.name for t in CASE_TEMPLATES]
    assert names == [
        "Priming (Hidden Variable)",
        "DSGE (Parameter Smuggling)",
        "String Theory (Borderline)",
        "Circular Definition",
    ]


def test_no_match_yields_nothing(clean_text: str) -> None:
    assert match_case_templates(clean_text) == []


def test_zombie_candidate_yields_zombie() -> None:
    findings = match_case_templates("The correlation between usage and retention causes growth.")
    assert len(findings) == 1
    assert findings[0].severity == Severity.ZOMBIE
    assert findings[0].case_study == "Priming (Hidden Variable)"
    assert findings[0].dimension == Dimension.FOUNDATIONS
    assert findings[0].principle == "I"
    assert findings[0].evidence is None


def test_non_zombie_template_yields_warning() -> None:
    findings = match_case_templates("We model every buyer as a rational agent.")
    assert len(findings) == 1
    assert findings[0].severity == Severity.WARNING
    assert findings[0].case_study == "DSGE (Parameter Smuggling)"


def test_template_reports_at_most_once() -> None:
    # Both Priming patterns match, and the first one matches twice
    text = (
        "Correlation leads to results. Association causes effects. "
        "This shows growth because of demand."
    )
    findings = match_case_templates(text)
    priming = [f for f in findings if f.case_study == "Priming (Hidden Variable)"]
    assert len(priming) == 1


def test_multiple_templates_in_catalog_order() -> None:
    text = (
        "An elegant theory of markets. "
        "X is defined as whatever satisfies X."
    )
    findings = match_case_templates(text)
    assert [f.case_study for f in findings] == [
        "String Theory (Borderline)",
        "Circular Definition",
    ]
    assert findings[0].severity == Severity.ZOMBIE
    assert findings[1].severity == Severity.WARNING
    assert findings[1].dimension == Dimension.INFERENCE

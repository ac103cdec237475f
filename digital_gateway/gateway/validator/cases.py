"""Case template catalog — classic failure patterns matched against content."""

from __future__ import annotations

import re

from gateway.validator.models import CaseTemplate, Dimension, Finding, Severity

CASE_TEMPLATES: tuple[CaseTemplate, ...] = (
    CaseTemplate(
        name="Priming (Hidden Variable)",
        dimension=Dimension.FOUNDATIONS,
        description="Hidden variable produces a spurious causal relationship",
        patterns=(
            r"\b(correlat|associat)\w*\b.*\b(caus|lead|result)\w*\b",
            r"\b(proves?|shows?|demonstrates?)\b.*\b(because|due to)\b",
        ),
        principle_violated="I",
        is_zombie_candidate=True,
    ),
    CaseTemplate(
        name="DSGE (Parameter Smuggling)",
        dimension=Dimension.FOUNDATIONS,
        description="Strong assumption smuggled in (e.g. rational expectations)",
        patterns=(
            r"\b(rational|optimal|efficient)\s+(agent|actor|user|player)\b",
            r"\b(equilibrium|steady.?state)\b(?!.*\b(if|when|assuming)\b)",
        ),
        principle_violated="I",
    ),
    CaseTemplate(
        name="String Theory (Borderline)",
        dimension=Dimension.SCIENTIFIC,
        description="Mathematically elegant but falsifiability is doubtful",
        patterns=(
            r"\b(elegant|beautiful|symmetric)\s+(solution|theory|model)\b",
            r"\b(in principle|theoretically)\s+(possible|valid)\b",
        ),
        principle_violated="III",
        is_zombie_candidate=True,
    ),
    CaseTemplate(
        name="Circular Definition",
        dimension=Dimension.INFERENCE,
        description="Circular definition",
        patterns=(
            r"\bX\s+is\s+defined\s+as\s+.*X\b",
            r"\bbecause\s+it\s+(is|was)\b.*\bso\s+it\s+(is|was)\b",
        ),
        principle_violated="II",
    ),
)

_COMPILED: tuple[tuple[CaseTemplate, tuple[re.Pattern[str], ...]], ...] = tuple(
    (template, tuple(re.compile(p, re.IGNORECASE) for p in template.patterns))
    for template in CASE_TEMPLATES
)


def match_case_templates(text: str) -> list[Finding]:
    """Return at most one finding per template: the first pattern that matches."""
    findings: list[Finding] = []
    for template, patterns in _COMPILED:
        for pattern in patterns:
            if pattern.search(text):
                findings.append(
                    Finding(
                        dimension=template.dimension,
                        severity=(
                            Severity.ZOMBIE
                            if template.is_zombie_candidate
                            else Severity.WARNING
                        ),
                        message=template.description,
                        case_study=template.name,
                        principle=template.principle_violated,
                    )
                )
                break
    return findings

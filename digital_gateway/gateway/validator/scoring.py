"""Viability scoring and zombie/nullity classification."""

from __future__ import annotations

from collections.abc import Iterable

from gateway.validator.models import Finding, Severity

FAIL_PENALTY = 0.3
WARNING_PENALTY = 0.1
ZOMBIE_PENALTY = 0.15

NULLITY_FAIL_COUNT = 3
NULLITY_SCORE = 0.2
DEFAULT_TAU = 0.5

# Penalties are decimal; rounding keeps e.g. 1.0 - 8 * 0.1 at exactly 0.2.
_SCORE_PRECISION = 6


def _count(findings: Iterable[Finding], severity: Severity) -> int:
    return sum(1 for f in findings if f.severity == severity)


def score_findings(findings: list[Finding]) -> float:
    """Start at 1.0 and subtract a fixed penalty per Fail, Warning and Zombie."""
    if not findings:
        return 1.0

    score = (
        1.0
        - _count(findings, Severity.FAIL) * FAIL_PENALTY
        - _count(findings, Severity.WARNING) * WARNING_PENALTY
        - _count(findings, Severity.ZOMBIE) * ZOMBIE_PENALTY
    )
    return min(1.0, max(0.0, round(score, _SCORE_PRECISION)))


def classify(
    findings: list[Finding], score: float, tau: float = DEFAULT_TAU,
) -> tuple[bool, bool]:
    """Return ``(is_nullity, is_zombie)``; nullity is checked first."""
    fail_count = _count(findings, Severity.FAIL)
    zombie_count = _count(findings, Severity.ZOMBIE)

    if fail_count >= NULLITY_FAIL_COUNT or score < NULLITY_SCORE:
        return True, False
    if zombie_count > 0 and score >= tau:
        return False, True
    return False, False

"""Deterministic lexical rules for the four MVT dimensions — no LLM, always run."""

from __future__ import annotations

import re

from gateway.validator.models import Dimension, Finding, Severity

_FLAGS = re.IGNORECASE

# Principle I: axiom smuggling (hidden assumptions)
FOUNDATIONS_RULES: list[tuple[re.Pattern[str], str, Severity]] = [
    (
        re.compile(r"\b(obviously|clearly|naturally|of course)\b", _FLAGS),
        "Implicit unproven assumption",
        Severity.WARNING,
    ),
    (
        re.compile(r"\b(everyone knows|it is known that|as we know)\b", _FLAGS),
        "Appeal to common knowledge",
        Severity.WARNING,
    ),
    (
        re.compile(r"\b(must|always|never|impossible)\b(?!.*\b(if|when|unless)\b)", _FLAGS),
        "Absolute statement without conditions",
        Severity.WARNING,
    ),
    (
        re.compile(r"\b(proves?|confirms?|demonstrates?)\s+that\b", _FLAGS),
        "Strong assertion without supporting evidence",
        Severity.WARNING,
    ),
]

# Principle II: isomorphism breaking (structural breaks)
STRUCTURAL_RULES: list[tuple[re.Pattern[str], str, Severity]] = [
    (
        re.compile(r"\b(therefore|thus|hence|so)\b(?!.*\bbecause\b)", _FLAGS),
        "Conclusion without causal link",
        Severity.WARNING,
    ),
    (
        re.compile(r"\b(this (shows|proves|means))\b(?!.*\b(since|as|because)\b)", _FLAGS),
        "Conclusion jump",
        Severity.WARNING,
    ),
    (
        re.compile(r"\b(A|X|this)\s+(is|equals?|means?)\s+(B|Y|that)\b(?!.*\bdefin)", _FLAGS),
        "Equivalence claimed without proof",
        Severity.WARNING,
    ),
]

# Principle III: lossless logic (inference gaps)
INFERENCE_RULES: list[tuple[re.Pattern[str], str, Severity]] = [
    (
        re.compile(r"\b(some|many|most|few)\s+\w+\s+(are|is|have|has)\b(?!.*\d+%)", _FLAGS),
        "Vague quantifier without data",
        Severity.WARNING,
    ),
    (
        re.compile(r"\b(likely|probably|possibly|maybe)\b(?!.*\d+%|\bprobability\b)", _FLAGS),
        "Probabilistic language without quantification",
        Severity.WARNING,
    ),
    (
        re.compile(r"\band so on\b|\betc\.?\b|\b\.{3}\b", _FLAGS),
        "Omission may hide key information",
        Severity.WARNING,
    ),
]

# Dimension IV: falsifiability
SCIENTIFIC_RULES: list[tuple[re.Pattern[str], str, Severity]] = [
    (
        re.compile(r"\b(cannot be (tested|verified|falsified))\b", _FLAGS),
        "Unfalsifiable claim",
        Severity.FAIL,
    ),
    (
        re.compile(r"\b(in principle|theoretically)\s+(correct|valid|true)\b", _FLAGS),
        "Theoretically correct but empirically unclear",
        Severity.WARNING,
    ),
    (
        re.compile(r"\b(self[- ]evident|axiom|postulate)\b(?!.*\bdef)", _FLAGS),
        "Claim of self-evidence",
        Severity.WARNING,
    ),
]

# (dimension, principle, rules) in evaluation order
RULE_TABLES: list[tuple[Dimension, str | None, list[tuple[re.Pattern[str], str, Severity]]]] = [
    (Dimension.FOUNDATIONS, "I", FOUNDATIONS_RULES),
    (Dimension.STRUCTURAL, "II", STRUCTURAL_RULES),
    (Dimension.INFERENCE, "III", INFERENCE_RULES),
    (Dimension.SCIENTIFIC, None, SCIENTIFIC_RULES),
]


def check_dimension(
    text: str,
    dimension: Dimension,
    rules: list[tuple[re.Pattern[str], str, Severity]],
    principle: str | None = None,
) -> list[Finding]:
    """Emit one finding per non-overlapping match of every rule."""
    findings: list[Finding] = []
    for pattern, message, severity in rules:
        for match in pattern.finditer(text):
            findings.append(
                Finding(
                    dimension=dimension,
                    severity=severity,
                    message=message,
                    evidence=match.group(0),
                    principle=principle,
                )
            )
    return findings


def run_all_rules(text: str) -> list[Finding]:
    """Run every dimension's rules, in dimension order."""
    if not text or not text.strip():
        return []

    findings: list[Finding] = []
    for dimension, principle, rules in RULE_TABLES:
        findings.extend(check_dimension(text, dimension, rules, principle))
    return findings

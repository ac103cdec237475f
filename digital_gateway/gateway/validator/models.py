"""Data models for MVT content validation."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field


class Severity(str, Enum):
    """Severity of a single finding, from blocking to clean."""

    FAIL = "fail"
    NULLITY = "nullity"
    ZOMBIE = "zombie"
    WARNING = "warning"
    PASS = "pass"

    @property
    def symbol(self) -> str:
        return _SEVERITY_SYMBOLS[self]


_SEVERITY_SYMBOLS = {
    Severity.FAIL: "✗",
    Severity.NULLITY: "∅",
    Severity.ZOMBIE: "🧟",
    Severity.WARNING: "⚠",
    Severity.PASS: "✓",
}

BLOCKING_SEVERITIES = frozenset({Severity.FAIL, Severity.NULLITY})
VIOLATION_SEVERITIES = frozenset({Severity.WARNING, Severity.FAIL})


class Dimension(str, Enum):
    """The four evaluation axes."""

    FOUNDATIONS = "Foundations"
    STRUCTURAL = "Structural Integrity"
    INFERENCE = "Inference Logic"
    SCIENTIFIC = "Scientific Integrity"


class ReportStatus(str, Enum):
    """Persisted outcome of a validation run."""

    PASS = "pass"
    WARNING = "warning"
    FAIL = "fail"
    ZOMBIE = "zombie"
    NULLITY = "nullity"


class Finding(BaseModel):
    """A single detected issue.

    ``dimension`` is only ``None`` for the informational AI summary note.
    """

    model_config = ConfigDict(frozen=True)

    dimension: Dimension | None
    severity: Severity
    message: str
    evidence: str | None = None
    case_study: str | None = None
    principle: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def symbol(self) -> str:
        return self.severity.symbol


class CaseTemplate(BaseModel):
    """Catalog entry for a classic failure pattern."""

    model_config = ConfigDict(frozen=True)

    name: str
    dimension: Dimension
    description: str
    patterns: tuple[str, ...]
    principle_violated: str
    is_zombie_candidate: bool = False


class ValidationContext(BaseModel):
    """Per-call options for a validation run."""

    name: str = "Unknown"
    api_key: str | None = Field(default=None, repr=False, exclude=True)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


EVIDENCE_PREVIEW_CHARS = 80


class ValidationReport(BaseModel):
    """Immutable result of one validation call."""

    model_config = ConfigDict(frozen=True)

    content_name: str = "Unknown"
    timestamp: str = Field(default_factory=_utc_now)
    findings: tuple[Finding, ...] = ()
    score: float = Field(default=1.0, ge=0.0, le=1.0)
    is_zombie: bool = False
    is_nullity: bool = False
    source: Literal["rules", "ai"] = "rules"
    model: str = ""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    recommendations: tuple[str, ...] = ()

    def viable(self) -> bool:
        """True iff no finding is blocking (Fail or Nullity)."""
        return not any(f.severity in BLOCKING_SEVERITIES for f in self.findings)

    def has_warnings(self) -> bool:
        return any(f.severity == Severity.WARNING for f in self.findings)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_viable(self) -> bool:
        return self.viable()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def violation_rate(self) -> float:
        if not self.findings:
            return 0.0
        violations = sum(1 for f in self.findings if f.severity in VIOLATION_SEVERITIES)
        return violations / len(self.findings)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> ReportStatus:
        if self.is_nullity:
            return ReportStatus.NULLITY
        if self.is_zombie:
            return ReportStatus.ZOMBIE
        if not self.viable():
            return ReportStatus.FAIL
        if self.has_warnings():
            return ReportStatus.WARNING
        return ReportStatus.PASS

    def to_dict(self) -> dict[str, Any]:
        """Plain structured form for API responses and storage."""
        return self.model_dump(mode="json")

    def summary(self) -> str:
        """Render a deterministic, human-readable report."""
        lines = [f"# MVT Validation Report: {self.content_name}"]
        lines.append(f"Time: {self.timestamp}\n")

        if self.is_nullity:
            status = "**Status**: NULLITY ∅ — no value, recommend removal\n"
        elif self.is_zombie:
            status = "**Status**: ZOMBIE 🧟 — structurally flawed but may carry predictive value\n"
        elif self.viable() and not self.has_warnings():
            status = "**Status**: PASS ✓\n"
        elif self.viable():
            status = "**Status**: PASS (with warnings) ⚠\n"
        else:
            status = "**Status**: DOA ✗ — not viable\n"
        lines.append(status)

        lines.append(f"**Score_MVT**: {self.score:.3f}")
        lines.append(f"**Violation Rate**: {self.violation_rate * 100:.1f}%\n")

        sections: list[tuple[str, Dimension | None]] = [
            (dim.value, dim) for dim in Dimension
        ]
        sections.append(("AI Summary", None))

        for title, dim in sections:
            dim_findings = [f for f in self.findings if f.dimension == dim]
            if not dim_findings:
                continue
            lines.append(f"\n## {title}")
            for f in dim_findings:
                line = f"- {f.severity.symbol} {f.message}"
                if f.principle:
                    line += f" [Principle {f.principle}]"
                if f.case_study:
                    line += f" [Case: {f.case_study}]"
                lines.append(line)
                if f.evidence:
                    ev = f.evidence
                    if len(ev) > EVIDENCE_PREVIEW_CHARS:
                        ev = ev[:EVIDENCE_PREVIEW_CHARS] + "..."
                    lines.append(f"  > `{ev}`")

        if self.recommendations:
            lines.append("\n## Recommendations")
            lines.extend(f"- {r}" for r in self.recommendations)

        return "\n".join(lines)

"""Validator interface and the deterministic rule-based implementation."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from gateway.validator.cases import match_case_templates
from gateway.validator.models import ValidationContext, ValidationReport
from gateway.validator.rules import run_all_rules
from gateway.validator.scoring import DEFAULT_TAU, classify, score_findings

logger = logging.getLogger(__name__)


class ContentValidator(ABC):
    """Anything that turns text into a ValidationReport without raising.

    ``tau`` overrides the viability threshold used for zombie classification
    for this call only.
    """

    @abstractmethod
    async def validate(
        self,
        text: str,
        context: ValidationContext | None = None,
        tau: float | None = None,
    ) -> ValidationReport:
        ...


class RuleBasedValidator(ContentValidator):
    """Pattern rules + case templates + fixed-penalty scoring.

    Pure and stateless: safe to share across threads and tasks.
    """

    def __init__(self, tau: float = DEFAULT_TAU) -> None:
        self._tau = tau

    @property
    def tau(self) -> float:
        return self._tau

    def run(
        self,
        text: str,
        context: ValidationContext | None = None,
        tau: float | None = None,
    ) -> ValidationReport:
        """Synchronous entry point for the deterministic path."""
        context = context or ValidationContext()

        findings = run_all_rules(text)
        findings.extend(match_case_templates(text))

        score = score_findings(findings)
        is_nullity, is_zombie = classify(
            findings, score, self._tau if tau is None else tau,
        )

        logger.debug(
            "Rule validation of %r produced %d findings (score=%.3f)",
            context.name,
            len(findings),
            score,
        )

        return ValidationReport(
            content_name=context.name,
            findings=tuple(findings),
            score=score,
            is_zombie=is_zombie,
            is_nullity=is_nullity,
            source="rules",
        )

    async def validate(
        self,
        text: str,
        context: ValidationContext | None = None,
        tau: float | None = None,
    ) -> ValidationReport:
        return self.run(text, context, tau)

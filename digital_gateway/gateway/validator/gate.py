"""Fail-fast gate: an early accept/reject decision on top of a validator."""

from __future__ import annotations

import logging

from gateway.validator.engine import ContentValidator, RuleBasedValidator
from gateway.validator.models import ValidationContext, ValidationReport
from gateway.validator.scoring import DEFAULT_TAU

logger = logging.getLogger(__name__)


def decide(report: ValidationReport, tau: float = DEFAULT_TAU) -> bool:
    """Branch on already-computed report fields; never re-scores.

    Zombie content may pass below ``tau``.
    """
    if report.is_nullity:
        return False
    if report.score < tau and not report.is_zombie:
        return False
    return report.viable()


class FailFastGate:
    """Wrap a ContentValidator and reduce its report to a boolean."""

    def __init__(
        self,
        validator: ContentValidator | None = None,
        tau: float = DEFAULT_TAU,
    ) -> None:
        self._validator = validator or RuleBasedValidator(tau=tau)
        self._tau = tau

    @property
    def tau(self) -> float:
        return self._tau

    async def check(
        self,
        text: str,
        context: ValidationContext | None = None,
        tau: float | None = None,
    ) -> tuple[bool, ValidationReport]:
        """Validate ``text`` and return ``(accepted, report)``."""
        threshold = self._tau if tau is None else tau
        report = await self._validator.validate(text, context, threshold)
        accepted = decide(report, threshold)
        logger.info(
            "Gate %s %r (score=%.3f, tau=%.2f, status=%s)",
            "accepted" if accepted else "rejected",
            report.content_name,
            report.score,
            threshold,
            report.status.value,
        )
        return accepted, report

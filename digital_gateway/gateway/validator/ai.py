"""LLM-backed validator that degrades to the rule-based path on any failure."""

from __future__ import annotations

import asyncio
import json
import logging
import re
from collections.abc import Callable
from functools import partial

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gateway.config import Settings
from gateway.llm.base import LLMBackend, LLMBackendError, LLMResponseError
from gateway.llm.factory import build_backend
from gateway.llm.prompts.mvt import MVT_SYSTEM_PROMPT, build_mvt_user_prompt
from gateway.validator.engine import ContentValidator, RuleBasedValidator
from gateway.validator.models import (
    Dimension,
    Finding,
    Severity,
    ValidationContext,
    ValidationReport,
)

logger = logging.getLogger(__name__)

BackendFactory = Callable[[str], LLMBackend]

AI_NULLITY_SCORE = 0.3
AI_ZOMBIE_SCORE = 0.7


class DimensionAssessment(BaseModel):
    model_config = ConfigDict(extra="ignore")

    score: float = Field(ge=0.0, le=1.0)
    issues: list[str] = Field(default_factory=list)


class DimensionAssessments(BaseModel):
    model_config = ConfigDict(extra="ignore")

    foundations: DimensionAssessment
    structure: DimensionAssessment
    inference: DimensionAssessment
    falsifiability: DimensionAssessment


class MvtAssessment(BaseModel):
    """Expected shape of the model's JSON answer."""

    model_config = ConfigDict(extra="ignore")

    viable: bool
    overall_score: float = Field(ge=0.0, le=1.0)
    dimensions: DimensionAssessments
    summary: str = ""
    recommendations: list[str] = Field(default_factory=list)


# (response key, dimension, principle) in report order
_DIMENSION_KEYS: tuple[tuple[str, Dimension, str], ...] = (
    ("foundations", Dimension.FOUNDATIONS, "I"),
    ("structure", Dimension.STRUCTURAL, "II"),
    ("inference", Dimension.INFERENCE, "III"),
    ("falsifiability", Dimension.SCIENTIFIC, "IV"),
)

_FENCE_RE = re.compile(r"```(?:json)?\s*\n?(.*?)```", re.DOTALL)


def score_to_severity(score: float) -> Severity:
    """Map a dimension sub-score onto a finding severity."""
    if score >= 0.8:
        return Severity.PASS
    if score >= 0.5:
        return Severity.WARNING
    if score >= 0.3:
        return Severity.ZOMBIE
    return Severity.FAIL


def parse_assessment(content: str) -> MvtAssessment:
    """Parse and validate the model's answer; raise LLMResponseError on any deviation."""
    match = _FENCE_RE.search(content)
    json_str = match.group(1) if match else content

    try:
        raw = json.loads(json_str.strip())
    except json.JSONDecodeError as e:
        raise LLMResponseError(f"AI response is not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise LLMResponseError(
            f"AI response must be a JSON object, got {type(raw).__name__}"
        )

    try:
        return MvtAssessment.model_validate(raw)
    except ValidationError as e:
        raise LLMResponseError(
            f"AI response does not match the MVT schema: {e.error_count()} error(s)"
        ) from e


def build_report_from_assessment(
    assessment: MvtAssessment,
    context: ValidationContext,
    model: str = "",
    prompt_tokens: int = 0,
    completion_tokens: int = 0,
) -> ValidationReport:
    """Translate a validated assessment into the standard report shape."""
    findings: list[Finding] = []
    for key, dimension, principle in _DIMENSION_KEYS:
        dim_data: DimensionAssessment = getattr(assessment.dimensions, key)
        severity = score_to_severity(dim_data.score)
        for issue in dim_data.issues:
            findings.append(
                Finding(
                    dimension=dimension,
                    severity=severity,
                    message=issue,
                    principle=principle,
                )
            )

    if assessment.summary.strip():
        findings.append(
            Finding(dimension=None, severity=Severity.PASS, message=assessment.summary)
        )

    score = assessment.overall_score
    return ValidationReport(
        content_name=context.name,
        findings=tuple(findings),
        score=score,
        is_nullity=not assessment.viable and score < AI_NULLITY_SCORE,
        is_zombie=assessment.viable and score < AI_ZOMBIE_SCORE,
        source="ai",
        model=model,
        prompt_tokens=prompt_tokens,
        completion_tokens=completion_tokens,
        recommendations=tuple(assessment.recommendations),
    )


class AiValidator(ContentValidator):
    """Deep analysis via an LLM, with the rule-based validator as fallback.

    ``validate`` never raises a backend error: missing credentials, transport
    failures, timeouts and malformed answers all produce the fallback report.
    A per-call ``tau`` reaches the fallback only; LLM reports use fixed bands.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        api_key: str | None = None,
        backend_factory: BackendFactory | None = None,
        fallback: RuleBasedValidator | None = None,
        timeout: float | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._api_key = api_key
        self._backend_factory = backend_factory or partial(build_backend, self._settings)
        self._fallback = fallback or RuleBasedValidator(
            tau=self._settings.viability_threshold
        )
        self._timeout = timeout if timeout is not None else self._settings.llm_timeout

    @property
    def fallback(self) -> RuleBasedValidator:
        return self._fallback

    def _resolve_api_key(self, context: ValidationContext) -> str | None:
        return context.api_key or self._api_key or self._settings.llm_api_key or None

    async def validate(
        self,
        text: str,
        context: ValidationContext | None = None,
        tau: float | None = None,
    ) -> ValidationReport:
        context = context or ValidationContext()

        if not text or not text.strip():
            return self._fallback.run(text, context, tau)

        api_key = self._resolve_api_key(context)
        if not api_key:
            logger.info("No LLM API key configured, using rule-based validator")
            return self._fallback.run(text, context, tau)

        try:
            return await asyncio.wait_for(
                self._validate_with_llm(text, context, api_key),
                timeout=self._timeout,
            )
        except LLMBackendError as e:
            logger.warning(
                "AI validation failed (%s), falling back to rule-based validator", e,
            )
        except TimeoutError:
            logger.warning(
                "AI validation timed out after %.1fs, falling back to rule-based validator",
                self._timeout,
            )
        except asyncio.CancelledError:
            task = asyncio.current_task()
            if task is not None and task.cancelling():
                raise
            logger.warning(
                "AI backend call was cancelled, falling back to rule-based validator"
            )

        return self._fallback.run(text, context, tau)

    async def _validate_with_llm(
        self, text: str, context: ValidationContext, api_key: str,
    ) -> ValidationReport:
        backend = self._backend_factory(api_key)
        try:
            user_prompt = build_mvt_user_prompt(
                text, context.name, self._settings.max_content_length,
            )
            response = await backend.generate(MVT_SYSTEM_PROMPT, user_prompt)
        finally:
            await backend.close()

        assessment = parse_assessment(response.content)
        report = build_report_from_assessment(
            assessment,
            context,
            model=response.model,
            prompt_tokens=response.prompt_tokens,
            completion_tokens=response.completion_tokens,
        )
        logger.info(
            "AI validation of %r: score=%.3f, %d findings",
            context.name,
            report.score,
            len(report.findings),
        )
        return report

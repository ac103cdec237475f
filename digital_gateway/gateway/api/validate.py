"""Validation API — validate text, run the fail-fast gate, review submissions."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from gateway.config import Settings
from gateway.db.database import Database
from gateway.deps import get_ai_validator, get_content_fetcher, get_database, get_settings
from gateway.fetcher.content import ContentFetcher, FetchError
from gateway.validator.ai import AiValidator
from gateway.validator.engine import ContentValidator
from gateway.validator.gate import FailFastGate
from gateway.validator.models import ValidationContext, ValidationReport

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["validate"])


class ValidateRequest(BaseModel):
    content: str = Field("", description="Already-fetched product text")
    name: str = Field("Unknown", description="Content name shown in the report")
    use_ai: bool = Field(True, description="Try the LLM path when a key is available")
    api_key: str | None = Field(None, description="Per-call LLM API key (BYOK)")


class GateRequest(ValidateRequest):
    tau: float | None = Field(None, ge=0.0, le=1.0, description="Viability threshold override")


class SubmissionRequest(BaseModel):
    url: str
    name: str = "Unknown"
    api_key: str | None = None


class ValidationResponse(BaseModel):
    report_id: str = ""
    status: str = ""
    report: dict[str, Any] = Field(default_factory=dict)
    summary: str = ""


class GateResponse(ValidationResponse):
    accepted: bool = False
    tau: float = 0.5


class SubmissionResponse(BaseModel):
    report_id: str
    approved: bool
    status: str
    score: float = 0.0
    error: str | None = None


def _select_validator(use_ai: bool, ai_validator: AiValidator) -> ContentValidator:
    return ai_validator if use_ai else ai_validator.fallback


def _to_response(report_id: str, report: ValidationReport) -> dict[str, Any]:
    return {
        "report_id": report_id,
        "status": report.status.value,
        "report": report.to_dict(),
        "summary": report.summary(),
    }


@router.post("/validate", response_model=ValidationResponse)
async def validate_content(
    body: ValidateRequest,
    ai_validator: AiValidator = Depends(get_ai_validator),
    db: Database = Depends(get_database),
) -> ValidationResponse:
    """Validate raw text and store a snapshot of the report."""
    validator = _select_validator(body.use_ai, ai_validator)
    context = ValidationContext(name=body.name, api_key=body.api_key)
    report = await validator.validate(body.content, context)

    report_id = await db.save_report(report)
    return ValidationResponse(**_to_response(report_id, report))


@router.post("/gate", response_model=GateResponse)
async def gate_content(
    body: GateRequest,
    ai_validator: AiValidator = Depends(get_ai_validator),
    db: Database = Depends(get_database),
    settings: Settings = Depends(get_settings),
) -> GateResponse:
    """Return an early accept/reject decision plus the full report."""
    tau = body.tau if body.tau is not None else settings.viability_threshold
    gate = FailFastGate(_select_validator(body.use_ai, ai_validator), tau=tau)
    context = ValidationContext(name=body.name, api_key=body.api_key)
    accepted, report = await gate.check(body.content, context)

    report_id = await db.save_report(report)
    return GateResponse(accepted=accepted, tau=tau, **_to_response(report_id, report))


@router.post("/submissions", response_model=SubmissionResponse)
async def review_submission(
    body: SubmissionRequest,
    ai_validator: AiValidator = Depends(get_ai_validator),
    fetcher: ContentFetcher = Depends(get_content_fetcher),
    db: Database = Depends(get_database),
) -> SubmissionResponse:
    """Fetch a submitted product's content, validate it and decide publication."""
    try:
        content = await fetcher.fetch(body.url)
    except FetchError as e:
        logger.warning("Could not fetch content for %r from %s: %s", body.name, body.url, e)
        report_id = await db.save_failure(body.name, str(e), source_url=body.url)
        return SubmissionResponse(
            report_id=report_id, approved=False, status="fail", error=str(e),
        )

    context = ValidationContext(name=body.name, api_key=body.api_key)
    report = await ai_validator.validate(content, context)
    report_id = await db.save_report(report, source_url=body.url)

    approved = report.viable()
    logger.info(
        "Submission %r %s (status=%s, score=%.3f)",
        body.name,
        "approved" if approved else "rejected",
        report.status.value,
        report.score,
    )
    return SubmissionResponse(
        report_id=report_id,
        approved=approved,
        status=report.status.value,
        score=report.score,
    )

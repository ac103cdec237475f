"""Settings API — LLM backend configuration and health."""

from __future__ import annotations

import logging
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

import gateway.deps as deps
from gateway.config import Settings
from gateway.deps import get_settings
from gateway.llm.base import LLMBackendError
from gateway.llm.factory import build_backend
from gateway.validator.ai import AiValidator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["settings"])


class LLMSettingsResponse(BaseModel):
    llm_backend: str = ""
    llm_api_url: str = ""
    llm_model: str = ""
    has_api_key: bool = False
    viability_threshold: float = 0.5


class LLMSettingsUpdateRequest(BaseModel):
    llm_backend: Literal["gemini", "openai_compat"] | None = None
    llm_api_url: str | None = None
    llm_api_key: str | None = None
    llm_model: str | None = None
    viability_threshold: float | None = Field(None, ge=0.0, le=1.0)


def _to_response(settings: Settings) -> LLMSettingsResponse:
    return LLMSettingsResponse(
        llm_backend=settings.llm_backend,
        llm_api_url=settings.llm_api_url,
        llm_model=settings.llm_model,
        has_api_key=settings.has_api_key,
        viability_threshold=settings.viability_threshold,
    )


@router.get("/settings/llm", response_model=LLMSettingsResponse)
async def get_llm_settings(
    settings: Settings = Depends(get_settings),
) -> LLMSettingsResponse:
    """Return current LLM backend configuration (key is redacted)."""
    return _to_response(settings)


@router.put("/settings/llm", response_model=LLMSettingsResponse)
async def update_llm_settings(
    body: LLMSettingsUpdateRequest,
    settings: Settings = Depends(get_settings),
) -> LLMSettingsResponse:
    """Update LLM settings at runtime (no restart needed).

    Only provided fields are updated; omitted fields keep their current value.
    """
    updates = body.model_dump(exclude_none=True)
    if "llm_api_url" in updates:
        updates["llm_api_url"] = updates["llm_api_url"].strip()
        if not updates["llm_api_url"]:
            raise HTTPException(status_code=400, detail="API URL cannot be empty")
    if "llm_model" in updates:
        updates["llm_model"] = updates["llm_model"].strip()
        if not updates["llm_model"]:
            raise HTTPException(status_code=400, detail="Model name cannot be empty")

    new_settings = settings.model_copy(update=updates)

    # Swap globally; validators hold their own copy of the settings
    deps._settings = new_settings
    deps._ai_validator = AiValidator(new_settings)

    logger.info(
        "LLM settings updated: backend=%s, model=%s, url=%s, tau=%.2f",
        new_settings.llm_backend,
        new_settings.llm_model,
        new_settings.llm_api_url,
        new_settings.viability_threshold,
    )
    return _to_response(new_settings)


@router.get("/health/llm")
async def health_check_llm(
    settings: Settings = Depends(get_settings),
) -> dict:
    """Check if the configured LLM backend is reachable."""
    try:
        backend = build_backend(settings, settings.llm_api_key)
    except LLMBackendError as e:
        return {"healthy": False, "model": settings.llm_model, "error": str(e)}

    try:
        healthy = await backend.health_check()
    finally:
        await backend.close()
    return {
        "healthy": healthy,
        "model": settings.llm_model,
        "error": "" if healthy else "unreachable",
    }

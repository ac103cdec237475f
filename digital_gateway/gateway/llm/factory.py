"""Build an LLM backend from settings and a resolved API key."""

from __future__ import annotations

from gateway.config import Settings
from gateway.llm.base import LLMBackend, LLMConfigurationError
from gateway.llm.gemini import GeminiBackend
from gateway.llm.openai_compat import OpenAICompatBackend


def build_backend(settings: Settings, api_key: str) -> LLMBackend:
    """Return a fresh backend for ``api_key``; the caller closes it."""
    if not api_key:
        raise LLMConfigurationError("No LLM API key configured")

    if settings.llm_backend == "gemini":
        return GeminiBackend(
            api_key=api_key,
            model=settings.llm_model,
            base_url=settings.llm_api_url,
            timeout=settings.llm_timeout,
        )
    if settings.llm_backend == "openai_compat":
        return OpenAICompatBackend(
            base_url=settings.llm_api_url,
            model=settings.llm_model,
            api_key=api_key,
            timeout=settings.llm_timeout,
        )
    raise LLMConfigurationError(f"Unknown LLM backend: {settings.llm_backend!r}")

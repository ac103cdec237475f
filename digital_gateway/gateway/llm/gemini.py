"""Google Gemini LLM backend implementation (generateContent REST API)."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from gateway.llm.base import (
    LLMBackend,
    LLMBackendError,
    LLMConfigurationError,
    LLMResponse,
    LLMResponseError,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
DEFAULT_MODEL = "gemini-2.0-flash"


def _first_part_text(candidate: Any) -> str:
    """Return the text of the first part of a candidate, or raise on a bad shape."""
    content = candidate.get("content") if isinstance(candidate, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        raise LLMResponseError("Unexpected Gemini response format (candidate has no parts).")
    text = parts[0].get("text")
    if not isinstance(text, str):
        raise LLMResponseError("Unexpected Gemini response format (part has no text).")
    return text


class GeminiBackend(LLMBackend):
    """Gemini /v1beta/models/{model}:generateContent backend."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 60.0,
        max_output_tokens: int = 2048,
    ) -> None:
        if not api_key:
            raise LLMConfigurationError("Gemini API key is not configured")
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._max_output_tokens = max_output_tokens
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={"x-goog-api-key": self._api_key},
                timeout=httpx.Timeout(self._timeout, connect=10.0),
            )
        return self._client

    async def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Send the prompt and content as one user turn, JSON response mode."""
        client = await self._get_client()

        payload: dict[str, Any] = {
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": f"{system_prompt}\n\n---\n\n{user_prompt}"}],
                }
            ],
            "generationConfig": {
                "temperature": 0.3,
                "maxOutputTokens": self._max_output_tokens,
                "responseMimeType": "application/json",
            },
        }

        logger.debug(
            "Gemini request: model=%s, prompt_len=%d",
            self._model,
            len(user_prompt),
        )

        try:
            resp = await client.post(
                f"/v1beta/models/{self._model}:generateContent", json=payload,
            )
        except httpx.HTTPError as e:
            raise LLMBackendError(f"Gemini request failed: {e}") from e

        if resp.status_code != 200:
            try:
                err_msg = resp.json().get("error", {}).get("message", resp.text)
            except (ValueError, AttributeError):
                err_msg = resp.text
            raise LLMBackendError(f"Gemini API error ({resp.status_code}): {err_msg}")

        try:
            data = resp.json()
        except ValueError:
            preview = resp.text[:200] if resp.text else "(empty)"
            raise LLMBackendError(f"Gemini returned non-JSON response: {preview}...")

        if not isinstance(data, dict):
            raise LLMResponseError(
                f"Unexpected Gemini response format (expected an object, got "
                f"{type(data).__name__})."
            )

        candidates = data.get("candidates") or []
        if not isinstance(candidates, list) or not candidates:
            raise LLMResponseError(
                f"Unexpected Gemini response format (no candidates). "
                f"Got keys: {list(data.keys())}."
            )

        text = _first_part_text(candidates[0])
        usage = data.get("usageMetadata")
        if not isinstance(usage, dict):
            usage = {}

        try:
            return LLMResponse(
                content=text,
                model=data.get("modelVersion") or self._model,
                prompt_tokens=usage.get("promptTokenCount", 0),
                completion_tokens=usage.get("candidatesTokenCount", 0),
                raw=data,
            )
        except ValidationError as e:
            raise LLMResponseError(f"Unexpected Gemini response format: {e}") from e

    async def health_check(self) -> bool:
        """Check if the API is reachable by fetching the model metadata."""
        try:
            client = await self._get_client()
            resp = await client.get(f"/v1beta/models/{self._model}")
            return resp.status_code == 200
        except httpx.HTTPError:
            return False

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

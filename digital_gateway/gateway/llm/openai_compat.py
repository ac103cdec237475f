"""OpenAI-compatible LLM backend implementation.

Works with OpenAI, Azure OpenAI, Groq, Together, OpenRouter, local vLLM,
and any other provider exposing the /v1/chat/completions endpoint.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from gateway.llm.base import LLMBackend, LLMBackendError, LLMResponse, LLMResponseError

logger = logging.getLogger(__name__)


class OpenAICompatBackend(LLMBackend):
    """OpenAI-compatible /v1/chat/completions backend."""

    def __init__(
        self,
        base_url: str,
        model: str,
        api_key: str = "",
        timeout: float = 60.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._api_key = api_key
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            headers: dict[str, str] = {}
            if self._api_key:
                headers["Authorization"] = f"Bearer {self._api_key}"
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                timeout=httpx.Timeout(self._timeout, connect=10.0),
            )
        return self._client

    async def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Call /v1/chat/completions with system + user messages."""
        client = await self._get_client()

        payload: dict[str, Any] = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": 0.3,
            "response_format": {"type": "json_object"},
            "stream": False,
        }

        logger.debug(
            "OpenAI-compat request: model=%s, prompt_len=%d",
            self._model,
            len(user_prompt),
        )

        try:
            resp = await client.post("/v1/chat/completions", json=payload)
        except httpx.HTTPError as e:
            raise LLMBackendError(f"API request failed: {e}") from e

        if resp.status_code != 200:
            try:
                err_data = resp.json()
                err_msg = err_data.get("error", {}).get("message", resp.text)
            except (ValueError, AttributeError):
                err_msg = resp.text
            raise LLMBackendError(f"API error ({resp.status_code}): {err_msg}")

        if not resp.content or not resp.content.strip():
            raise LLMBackendError(
                f"API returned an empty response (status {resp.status_code}). "
                f"Check that llm_api_url ({self._base_url}) is correct."
            )

        try:
            data = resp.json()
        except ValueError:
            preview = resp.text[:200] if resp.text else "(empty)"
            raise LLMBackendError(
                f"API returned non-JSON response: {preview}... — "
                f"Check that llm_api_url ({self._base_url}) is correct."
            )

        if not isinstance(data, dict):
            raise LLMResponseError(
                f"Unexpected API response format (expected an object, got "
                f"{type(data).__name__})."
            )

        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            raise LLMResponseError(
                f"Unexpected API response format (missing 'choices'). "
                f"Got keys: {list(data.keys())}."
            )

        choice = choices[0] if isinstance(choices[0], dict) else {}
        message = choice.get("message")
        if not isinstance(message, dict) or not isinstance(message.get("content"), str):
            raise LLMResponseError("Unexpected API response format (choice has no message content).")
        usage = data.get("usage")
        if not isinstance(usage, dict):
            usage = {}

        try:
            return LLMResponse(
                content=message["content"],
                model=data.get("model") or self._model,
                prompt_tokens=usage.get("prompt_tokens", 0),
                completion_tokens=usage.get("completion_tokens", 0),
                raw=data,
            )
        except ValidationError as e:
            raise LLMResponseError(f"Unexpected API response format: {e}") from e

    async def health_check(self) -> bool:
        """Check if the API is reachable by listing models."""
        try:
            client = await self._get_client()
            resp = await client.get("/v1/models")
            return resp.status_code == 200
        except httpx.HTTPError:
            return False

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

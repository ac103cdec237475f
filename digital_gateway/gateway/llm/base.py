"""Abstract LLM backend interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field


class LLMBackendError(RuntimeError):
    """Any transport, auth, quota or response failure from an LLM backend."""


class LLMConfigurationError(LLMBackendError):
    """The backend cannot be built (missing key, unknown backend type)."""


class LLMResponseError(LLMBackendError):
    """The backend answered, but not with what was asked for."""


class LLMResponse(BaseModel):
    """Structured response from any LLM backend."""

    content: str
    model: str = ""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    raw: dict[str, Any] = Field(default_factory=dict)


class LLMBackend(ABC):
    """Abstract interface for LLM backends."""

    @property
    def model_name(self) -> str:
        """Return the configured model name."""
        return getattr(self, "_model", "")

    @abstractmethod
    async def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        """Analyze ``user_prompt`` under the instructions in ``system_prompt``.

        Implementations raise LLMBackendError on any failure.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if the backend is reachable and ready."""
        ...

    async def close(self) -> None:
        """Release any held connections."""
        return None

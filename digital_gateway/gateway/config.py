"""Application settings loaded from an options file or the environment."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

DEFAULT_OPTIONS_PATH = "/data/options.json"


class Settings(BaseModel):
    llm_backend: Literal["gemini", "openai_compat"] = "gemini"
    llm_api_url: str = "https://generativelanguage.googleapis.com"
    llm_api_key: str = Field(default="", repr=False)
    llm_model: str = "gemini-2.0-flash"
    llm_timeout: float = Field(default=60.0, gt=0)
    viability_threshold: float = Field(default=0.5, ge=0.0, le=1.0)
    max_content_length: int = Field(default=10_000, gt=0)
    db_path: str | None = None
    dev_mode: bool = False

    @property
    def has_api_key(self) -> bool:
        return bool(self.llm_api_key)


def _dev_mode() -> bool:
    return os.environ.get("GATEWAY_DEV_MODE", "").lower() == "true"


def load_settings() -> Settings:
    """Load settings from the options JSON file, falling back to env vars."""
    opts_path = os.environ.get("GATEWAY_OPTIONS_PATH", DEFAULT_OPTIONS_PATH)
    if Path(opts_path).exists():
        options = json.loads(Path(opts_path).read_text())
        options.setdefault("dev_mode", _dev_mode())
        return Settings(**options)

    return Settings(
        llm_backend=os.environ.get("LLM_BACKEND", "gemini"),
        llm_api_url=os.environ.get(
            "LLM_API_URL", "https://generativelanguage.googleapis.com",
        ),
        llm_api_key=os.environ.get("LLM_API_KEY") or os.environ.get("GEMINI_API_KEY", ""),
        llm_model=os.environ.get("LLM_MODEL", "gemini-2.0-flash"),
        llm_timeout=float(os.environ.get("LLM_TIMEOUT", "60")),
        viability_threshold=float(os.environ.get("MVT_TAU", "0.5")),
        max_content_length=int(os.environ.get("MAX_CONTENT_LENGTH", "10000")),
        db_path=os.environ.get("GATEWAY_DB_PATH") or None,
        dev_mode=_dev_mode(),
    )

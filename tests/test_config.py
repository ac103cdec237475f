"""Tests for settings loading."""

import json
from pathlib import Path

import pytest

from gateway.config import Settings, load_settings


@pytest.fixture
def no_options_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GATEWAY_OPTIONS_PATH", str(tmp_path / "missing.json"))
    for name in ("LLM_BACKEND", "LLM_API_KEY", "GEMINI_API_KEY", "LLM_MODEL", "MVT_TAU"):
        monkeypatch.delenv(name, raising=False)


def test_defaults_from_env(no_options_file: None) -> None:
    settings = load_settings()
    assert settings.llm_backend == "gemini"
    assert settings.viability_threshold == 0.5
    assert settings.has_api_key is False


def test_gemini_key_fallback(no_options_file: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "g-key")
    assert load_settings().llm_api_key == "g-key"

    monkeypatch.setenv("LLM_API_KEY", "primary")
    assert load_settings().llm_api_key == "primary"


def test_tau_from_env(no_options_file: None, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MVT_TAU", "0.7")
    assert load_settings().viability_threshold == 0.7


def test_options_file_wins(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "options.json"
    path.write_text(json.dumps({"llm_backend": "openai_compat", "llm_model": "m"}))
    monkeypatch.setenv("GATEWAY_OPTIONS_PATH", str(path))
    monkeypatch.setenv("LLM_MODEL", "ignored")

    settings = load_settings()
    assert settings.llm_backend == "openai_compat"
    assert settings.llm_model == "m"


def test_key_not_in_repr() -> None:
    assert "secret" not in repr(Settings(llm_api_key="secret"))

"""Shared test fixtures and configuration."""

import os
import sys
from pathlib import Path

# Add digital_gateway/ to Python path so `from gateway.xxx` imports work
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "digital_gateway"))

import pytest

os.environ["GATEWAY_DEV_MODE"] = "true"

CLEAN_TEXT = "This is a well-researched claim supported by empirical data."
WARNING_TEXT = "Obviously everyone knows this must always work."
UNFALSIFIABLE_TEXT = "This theory cannot be tested or verified by any means."


@pytest.fixture
def clean_text() -> str:
    return CLEAN_TEXT


@pytest.fixture
def warning_text() -> str:
    return WARNING_TEXT


@pytest.fixture
def unfalsifiable_text() -> str:
    return UNFALSIFIABLE_TEXT

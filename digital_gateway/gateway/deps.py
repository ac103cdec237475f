"""Shared FastAPI dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gateway.config import Settings

if TYPE_CHECKING:
    from gateway.db.database import Database
    from gateway.fetcher.content import ContentFetcher
    from gateway.validator.ai import AiValidator

_settings: Settings | None = None
_database: Database | None = None
_ai_validator: AiValidator | None = None
_content_fetcher: ContentFetcher | None = None


def get_settings() -> Settings:
    """FastAPI dependency: return the loaded Settings."""
    assert _settings is not None, "Settings not initialised"
    return _settings


def get_database() -> Database:
    """FastAPI dependency: return the shared Database."""
    from gateway.db.database import Database

    assert _database is not None, "Database not initialised"
    return _database


def get_ai_validator() -> AiValidator:
    """FastAPI dependency: return the shared AiValidator."""
    from gateway.validator.ai import AiValidator

    assert _ai_validator is not None, "AiValidator not initialised"
    return _ai_validator


def get_content_fetcher() -> ContentFetcher:
    """FastAPI dependency: return the shared ContentFetcher."""
    from gateway.fetcher.content import ContentFetcher

    assert _content_fetcher is not None, "ContentFetcher not initialised"
    return _content_fetcher

"""FastAPI application -- Digital Gateway MVT validation entrypoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

import gateway.deps as deps
from gateway.api.reports import router as reports_router
from gateway.api.settings import router as settings_router
from gateway.api.validate import router as validate_router
from gateway.config import load_settings
from gateway.db.database import Database
from gateway.fetcher.content import ContentFetcher
from gateway.validator.ai import AiValidator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: init resources on startup, clean up on shutdown."""
    settings = load_settings()

    log_level = logging.DEBUG if settings.dev_mode else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info(
        "Digital Gateway starting with settings: %s",
        settings.model_dump(exclude={"llm_api_key"}),
    )
    deps._settings = settings

    # Init database
    deps._database = Database(settings.db_path)
    await deps._database.connect()
    logger.info("Database connected")

    deps._content_fetcher = ContentFetcher()
    deps._ai_validator = AiValidator(settings)
    logger.info(
        "LLM backend: %s (model: %s, key configured: %s)",
        settings.llm_backend,
        settings.llm_model,
        settings.has_api_key,
    )

    yield

    # Shutdown
    if deps._database:
        await deps._database.close()
    deps._settings = None
    deps._database = None
    deps._ai_validator = None
    deps._content_fetcher = None


app = FastAPI(
    title="Digital Gateway MVT",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(validate_router)
app.include_router(reports_router)
app.include_router(settings_router)

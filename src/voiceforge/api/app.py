"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from voiceforge import __version__
from voiceforge.api.config import APIConfig, DEFAULT_API_CONFIG
from voiceforge.api.health import router as health_router
from voiceforge.api.middleware import setup_middleware
from voiceforge.core.exceptions import VoiceForgeError
from voiceforge.service import VoiceForge

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    logger.info("Starting VoiceForge API...")
    config: APIConfig = app.state.config

    if app.state.forge is None:
        try:
            app.state.forge = VoiceForge.from_config(
                env=config.config_env,
                config_dir=config.config_dir,
            )
            app.state.owns_forge = True
        except VoiceForgeError as e:
            logger.error(f"Failed to initialize voice service: {e}")

    app.state.initialized = True
    logger.info("VoiceForge API started")

    yield

    logger.info("Shutting down VoiceForge API...")

    if app.state.forge is not None and app.state.owns_forge:
        try:
            await app.state.forge.close()
        except Exception as e:
            logger.error(f"Error closing voice service: {e}")

    logger.info("VoiceForge API shutdown complete")


def create_app(config: APIConfig | None = None, forge: VoiceForge | None = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        config: API settings
        forge: Prebuilt gateway service; built from config files at startup if omitted
    """
    config = config or DEFAULT_API_CONFIG

    app = FastAPI(
        title="VoiceForge API",
        description="Voice registry, speech synthesis and voice training gateway",
        version=__version__,
        docs_url="/docs" if config.enable_docs else None,
        redoc_url="/redoc" if config.enable_docs else None,
        openapi_url="/openapi.json" if config.enable_docs else None,
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.forge = forge
    app.state.owns_forge = False
    app.state.initialized = forge is not None

    if config.enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_middleware(app, max_body_bytes=config.max_body_bytes)

    app.include_router(health_router, prefix="/health", tags=["health"])

    from voiceforge.api.v1.router import router as v1_router
    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()

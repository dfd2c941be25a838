"""
Main FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from landquote import __version__
from landquote.api.error_handlers import register_error_handlers
from landquote.api.estimates import router as estimates_router
from landquote.api.middleware import LoggingContextMiddleware, RequestCorrelationMiddleware
from landquote.core.config import settings
from landquote.core.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Lifespan context manager for FastAPI application.

    Configures logging on startup.
    """
    setup_logging(
        log_level="DEBUG" if settings.environment == "development" else "INFO",
        log_file=settings.log_file,
        json_logs=(settings.environment == "production"),
        enable_console=True,
    )
    logger.info(f"Starting LandQuote API v{__version__} in {settings.environment} mode")
    if not settings.geocoding_enabled:
        logger.warning("No Google Maps API key configured; addresses will not be verified")

    yield

    logger.info("Shutting down LandQuote API")


app = FastAPI(
    title="LandQuote API",
    description="Geographic-aware land clearing estimates",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Added in reverse order of execution
app.add_middleware(LoggingContextMiddleware)
app.add_middleware(RequestCorrelationMiddleware)

register_error_handlers(app)

app.include_router(estimates_router, prefix=settings.api_v1_prefix)


@app.get("/")
async def root() -> dict[str, str]:
    """
    Root endpoint returning API information.

    Returns:
        dict[str, str]: API information including name and version.
    """
    return {
        "name": "LandQuote API",
        "version": __version__,
        "description": "Geographic-aware land clearing estimates",
    }


@app.get("/health")
async def health_check() -> dict[str, str]:
    """
    Health check endpoint.

    Returns:
        dict[str, str]: Health status and whether geocoding is available.
    """
    return {
        "status": "healthy",
        "geocoding": "enabled" if settings.geocoding_enabled else "fallback",
    }

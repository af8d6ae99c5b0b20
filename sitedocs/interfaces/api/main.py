"""
FastAPI Main Application - API entry point.

Run with: uvicorn sitedocs.interfaces.api.main:app --reload
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sitedocs import __version__
from sitedocs.config import configure_logging, get_settings

from .deps import cleanup_services, init_services
from .middleware import ErrorHandlerMiddleware, RateLimitMiddleware, RequestContextMiddleware
from .routes import health, search

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Starting SiteDocs API...")
    logger.info("  Database: %s", settings.db_path)

    await init_services()
    logger.info("  Services initialized")

    yield

    logger.info("Shutting down SiteDocs API...")
    await cleanup_services()


def create_app() -> FastAPI:
    """Create FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="SiteDocs API",
        description="Relevance search over construction-project documents",
        version=__version__,
        debug=settings.api_debug,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # First added = innermost; rate limiting ends up outermost
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(RateLimitMiddleware, requests_per_minute=settings.api_rate_limit_rpm)

    allowed_origins = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(search.router, prefix="/api/search", tags=["Search"])

    return app


app = create_app()

"""
Health Routes - System health and status endpoints.
"""

from typing import Any

from fastapi import APIRouter

from sitedocs import __version__

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": "sitedocs"}


@router.get("/api")
async def api_info() -> dict[str, Any]:
    """API info endpoint."""
    return {
        "name": "SiteDocs API",
        "version": __version__,
        "description": "Relevance search over construction-project documents",
        "docs": "/docs",
    }

"""
API Dependencies - Dependency injection for FastAPI routes.

Provides singleton instances of the repository and search engine.
"""

from __future__ import annotations

from functools import lru_cache

from sitedocs.adapters.sqlite import SQLiteDocumentRepository
from sitedocs.config import get_settings
from sitedocs.domains.content import RepositoryContentProvider
from sitedocs.domains.search import DocumentSearchEngine


@lru_cache
def get_document_repository() -> SQLiteDocumentRepository:
    """Get SQLite repository singleton."""
    settings = get_settings()
    return SQLiteDocumentRepository(settings.db_path)


@lru_cache
def get_search_engine() -> DocumentSearchEngine:
    """Get search engine singleton; owns history and saved filters for the process."""
    provider = RepositoryContentProvider(get_document_repository())
    return DocumentSearchEngine.from_settings(get_settings(), provider)


async def init_services() -> None:
    """
    Initialize services on startup.

    This should be called from the FastAPI lifespan handler.
    """
    repo = get_document_repository()
    await repo.initialize()


async def cleanup_services() -> None:
    """Cleanup services on shutdown."""
    repo = get_document_repository()
    await repo.close()

"""
Search Contracts - Interfaces for search domain.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from .models import Document, RelevanceMatch, SearchOptions, SearchPage, SearchResult


@runtime_checkable
class SearchEngine(Protocol):
    """Contract for search implementations."""

    async def search(
        self,
        documents: Sequence[Document],
        options: SearchOptions,
    ) -> list[SearchResult]:
        """Execute search and return one page of ranked results."""
        ...

    async def search_page(
        self,
        documents: Sequence[Document],
        options: SearchOptions,
    ) -> SearchPage:
        """Execute search and return one page plus the total match count."""
        ...

    def get_suggestions(self, query: str, documents: Sequence[Document]) -> list[str]:
        """Return autocomplete candidates for a partial query."""
        ...


@runtime_checkable
class Scorer(Protocol):
    """Contract for per-document relevance scoring."""

    async def score(
        self,
        document: Document,
        query: str,
        search_in_content: bool = True,
        search_in_metadata: bool = True,
    ) -> RelevanceMatch:
        """Score one document against a query."""
        ...


@runtime_checkable
class DocumentRepository(Protocol):
    """Contract for the source of the search corpus."""

    async def list_documents(self) -> list[Document]:
        """Return the full corpus."""
        ...

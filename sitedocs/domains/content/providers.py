"""
Content Providers - Concrete sources of extracted document text.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from .models import ExtractedContent, PageContent

if TYPE_CHECKING:
    from sitedocs.adapters.sqlite import SQLiteDocumentRepository
    from sitedocs.domains.search.models import Document

logger = logging.getLogger(__name__)

__all__ = ["StaticContentProvider", "RepositoryContentProvider"]


class StaticContentProvider:
    """
    Serve content from an in-memory mapping of document id to text.

    Documents missing from the mapping have no content.

    Example:
        >>> provider = StaticContentProvider({"doc-1": "Planos estructurales."})
        >>> content = await provider.extract_content(document)
    """

    def __init__(self, texts: Mapping[str, str] | None = None) -> None:
        self._texts = dict(texts or {})

    def set_text(self, document_id: str, text: str) -> None:
        """Register or replace the text for a document."""
        self._texts[document_id] = text

    async def extract_content(self, document: Document) -> ExtractedContent:
        text = self._texts.get(document.id)
        if text is None:
            return ExtractedContent.empty()
        return ExtractedContent(
            text=text,
            confidence=1.0,
            pages=[PageContent(page=1, text=text)],
        )


class RepositoryContentProvider:
    """Serve content previously extracted and stored in the document repository."""

    def __init__(self, repository: SQLiteDocumentRepository) -> None:
        """
        Initialize provider.

        Args:
            repository: Repository holding the document_content table
        """
        self._repo = repository

    async def extract_content(self, document: Document) -> ExtractedContent:
        content = await self._repo.get_content(document.id)
        if content is None:
            logger.debug("No stored content for document %s", document.id)
            return ExtractedContent.empty()
        return content

"""
Relevance Scorer - Multi-criteria match score for one document.

Scoring (case-insensitive substring matching, no tokenization):
- Metadata field match: +10 for ``name``, +5 for any other field
- Extracted content match (content-bearing types only): +3
- Each matching tag: +7, independent of the metadata/content toggles
"""

from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

from .metadata import extract_metadata
from .models import Document, Highlights, MetadataHighlight, RelevanceMatch

if TYPE_CHECKING:
    from sitedocs.domains.content import ContentProvider

logger = logging.getLogger(__name__)

__all__ = ["RelevanceScorer", "highlight", "DEFAULT_CONTENT_TYPES"]

NAME_SCORE = 10
METADATA_SCORE = 5
CONTENT_SCORE = 3
TAG_SCORE = 7

MAX_CONTENT_HIGHLIGHTS = 3
DEFAULT_CONTENT_TYPES = ("pdf", "doc", "docx")

_SENTENCE_BOUNDARY = re.compile(r"[.!?]")


def highlight(text: str, query: str) -> str:
    """Wrap every case-insensitive occurrence of ``query`` in ``<mark>`` tags."""
    pattern = re.compile(f"({re.escape(query)})", re.IGNORECASE)
    return pattern.sub(r"<mark>\1</mark>", text)


class RelevanceScorer:
    """
    Score documents against a free-text query.

    Example:
        >>> scorer = RelevanceScorer(StaticContentProvider({"d1": "Planos."}))
        >>> match = await scorer.score(document, "plano")
        >>> match.score, match.matched_fields
        (10, ['name'])
    """

    def __init__(
        self,
        content_provider: ContentProvider | None = None,
        content_types: Iterable[str] = DEFAULT_CONTENT_TYPES,
        content_timeout: float = 5.0,
    ) -> None:
        """
        Initialize scorer.

        Args:
            content_provider: Source of extracted text; None disables content scoring
            content_types: Document types that carry extractable text
            content_timeout: Seconds to wait for the provider per document
        """
        self._provider = content_provider
        self._content_types = frozenset(t.lower() for t in content_types)
        self._content_timeout = content_timeout

    async def score(
        self,
        document: Document,
        query: str,
        search_in_content: bool = True,
        search_in_metadata: bool = True,
    ) -> RelevanceMatch:
        """
        Compute score, highlights and matched fields for a document.

        Args:
            document: Document to score
            query: Raw query string
            search_in_content: Consider extracted content
            search_in_metadata: Consider metadata fields

        Returns:
            Match details; a score of 0 means no match
        """
        if not query:
            return RelevanceMatch()

        query_lower = query.lower()
        score = 0
        highlights = Highlights()
        matched_fields: list[str] = []

        if search_in_metadata:
            for field, value in extract_metadata(document).items():
                if query_lower in value.lower():
                    score += NAME_SCORE if field == "name" else METADATA_SCORE
                    matched_fields.append(field)
                    highlights.metadata.append(
                        MetadataHighlight(field=field, text=highlight(value, query))
                    )

        if search_in_content and self._has_content(document):
            text = await self._fetch_content(document)
            if text and query_lower in text.lower():
                score += CONTENT_SCORE
                matched_fields.append("content")
                highlights.content = self._content_highlights(text, query)

        for tag in document.tags:
            if query_lower in tag.lower():
                score += TAG_SCORE
                matched_fields.append("tags")

        return RelevanceMatch(
            score=score,
            highlights=highlights,
            matched_fields=matched_fields,
        )

    def _has_content(self, document: Document) -> bool:
        return self._provider is not None and document.type.lower() in self._content_types

    async def _fetch_content(self, document: Document) -> str | None:
        """Fetch content text; timeouts and provider errors yield None."""
        assert self._provider is not None
        try:
            content = await asyncio.wait_for(
                self._provider.extract_content(document),
                timeout=self._content_timeout,
            )
        except TimeoutError:
            logger.warning(
                "Content provider timed out after %.1fs for document %s",
                self._content_timeout,
                document.id,
            )
            return None
        except Exception as e:
            logger.warning("Content provider failed for document %s: %s", document.id, e)
            return None
        return content.text

    @staticmethod
    def _content_highlights(text: str, query: str) -> list[str]:
        """Highlight up to three sentences containing the query."""
        query_lower = query.lower()
        sentences = [s for s in _SENTENCE_BOUNDARY.split(text) if query_lower in s.lower()]
        return [highlight(s, query) for s in sentences[:MAX_CONTENT_HIGHLIGHTS]]

"""
Document Search Engine - Public entry point of the search domain.

Pipeline:
    filter -> score (concurrent) -> drop zero scores -> sort -> paginate

Owns the process-lifetime state: bounded search history and saved filters.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Awaitable, Sequence
from typing import TYPE_CHECKING

from sitedocs.config.errors import SearchCancelledError

from .filters import apply_filters
from .models import (
    Document,
    Highlights,
    RelevanceMatch,
    SavedFilter,
    SearchOptions,
    SearchPage,
    SearchResult,
)
from .ranker import sort_results
from .scorer import DEFAULT_CONTENT_TYPES, RelevanceScorer
from .suggestions import generate_suggestions

if TYPE_CHECKING:
    from sitedocs.config import Settings
    from sitedocs.domains.content import ContentProvider

    from .contracts import Scorer

logger = logging.getLogger(__name__)

__all__ = ["DocumentSearchEngine"]


class DocumentSearchEngine:
    """
    Relevance search over an in-memory document corpus.

    Instances are independent; callers needing isolated history or saved
    filters construct their own.

    Example:
        >>> engine = DocumentSearchEngine(StaticContentProvider())
        >>> results = await engine.search(documents, SearchOptions(query="plano"))
        >>> engine.get_history()
        ['plano']
    """

    def __init__(
        self,
        content_provider: ContentProvider | None = None,
        *,
        scorer: Scorer | None = None,
        history_size: int = 10,
        suggestion_limit: int = 10,
        max_concurrent: int = 8,
        content_types: Sequence[str] = DEFAULT_CONTENT_TYPES,
        content_timeout: float = 5.0,
    ) -> None:
        """
        Initialize search engine.

        Args:
            content_provider: Source of extracted document text
            scorer: Custom scorer; overrides the content provider settings
            history_size: Maximum number of remembered queries
            suggestion_limit: Maximum number of suggestions returned
            max_concurrent: Maximum documents scored concurrently
            content_types: Document types that carry extractable text
            content_timeout: Seconds to wait for the provider per document
        """
        self._scorer = scorer or RelevanceScorer(
            content_provider,
            content_types=content_types,
            content_timeout=content_timeout,
        )
        self._history_size = history_size
        self._suggestion_limit = suggestion_limit
        self._max_concurrent = max(1, max_concurrent)

        self._lock = threading.Lock()
        self._history: list[str] = []
        self._saved_filters: dict[str, SearchOptions] = {}

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        content_provider: ContentProvider | None = None,
    ) -> DocumentSearchEngine:
        """Build an engine configured from application settings."""
        return cls(
            content_provider,
            history_size=settings.search_history_size,
            suggestion_limit=settings.suggestion_limit,
            max_concurrent=settings.max_concurrent_scoring,
            content_types=settings.content_types,
            content_timeout=settings.content_timeout_seconds,
        )

    async def search(
        self,
        documents: Sequence[Document],
        options: SearchOptions,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> list[SearchResult]:
        """Execute a search and return one page of ranked results."""
        page = await self.search_page(documents, options, cancel_event=cancel_event)
        return page.results

    async def search_page(
        self,
        documents: Sequence[Document],
        options: SearchOptions,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> SearchPage:
        """
        Execute a search, keeping the total match count alongside the page.

        A blank query returns every filtered document with score 1 in corpus
        order, unsorted and unpaginated, and leaves history untouched.

        Args:
            documents: Corpus to search
            options: Query, filters, ordering and pagination
            cancel_event: Set by the caller to abandon the search

        Returns:
            Results in ``[offset, offset + limit)`` of the ranked sequence and
            the number of matches before pagination

        Raises:
            SearchCancelledError: If ``cancel_event`` was set before scoring finished
        """
        candidates = apply_filters(documents, options.filters)

        if not options.query.strip():
            listed = [
                SearchResult(document=doc, score=1, highlights=Highlights())
                for doc in candidates
            ]
            return SearchPage(results=listed, total=len(listed))

        matches = await self._score_all(candidates, options, cancel_event)
        results = [
            SearchResult(
                document=doc,
                score=match.score,
                highlights=match.highlights,
                matched_fields=match.matched_fields,
            )
            for doc, match in zip(candidates, matches)
            if match.score > 0
        ]

        ranked = sort_results(results, options.sort_by, options.sort_order)
        page = ranked[options.offset : options.offset + options.limit]

        self._record_query(options.query)

        logger.info(
            "Search: query='%s' -> %d results (matched=%d, filtered=%d, corpus=%d)",
            options.query[:50],
            len(page),
            len(results),
            len(candidates),
            len(documents),
        )
        return SearchPage(results=page, total=len(results))

    async def _score_all(
        self,
        documents: list[Document],
        options: SearchOptions,
        cancel_event: asyncio.Event | None,
    ) -> list[RelevanceMatch]:
        """Score documents concurrently, preserving input order."""
        semaphore = asyncio.Semaphore(self._max_concurrent)

        async def score_with_limit(doc: Document) -> RelevanceMatch:
            async with semaphore:
                _raise_if_cancelled(cancel_event)
                scoring = self._scorer.score(
                    doc,
                    options.query,
                    options.search_in_content,
                    options.search_in_metadata,
                )
                if cancel_event is None:
                    return await scoring
                return await _until_cancelled(scoring, cancel_event)

        outcomes = await asyncio.gather(
            *(score_with_limit(doc) for doc in documents),
            return_exceptions=True,
        )

        matches: list[RelevanceMatch] = []
        for doc, outcome in zip(documents, outcomes):
            if isinstance(outcome, SearchCancelledError):
                raise outcome
            if isinstance(outcome, BaseException):
                logger.error("Failed to score document %s: %s", doc.id, outcome)
                matches.append(RelevanceMatch())
            else:
                matches.append(outcome)
        return matches

    # --- History ---

    def _record_query(self, query: str) -> None:
        """Prepend a new query; repeats keep their position."""
        with self._lock:
            if query in self._history:
                return
            self._history.insert(0, query)
            del self._history[self._history_size :]

    def get_history(self) -> list[str]:
        """Most-recent-first distinct queries."""
        with self._lock:
            return list(self._history)

    def clear_history(self) -> None:
        with self._lock:
            self._history.clear()

    # --- Saved filters ---

    def save_filter(self, name: str, options: SearchOptions) -> None:
        """Store a deep snapshot under ``name``, replacing any previous one."""
        snapshot = options.model_copy(deep=True)
        with self._lock:
            self._saved_filters[name] = snapshot
        logger.debug("Saved filter '%s'", name)

    def get_saved_filters(self) -> list[SavedFilter]:
        """Saved filters in insertion order."""
        with self._lock:
            items = list(self._saved_filters.items())
        return [
            SavedFilter(name=name, options=options.model_copy(deep=True))
            for name, options in items
        ]

    def get_saved_filter(self, name: str) -> SearchOptions | None:
        with self._lock:
            options = self._saved_filters.get(name)
        return options.model_copy(deep=True) if options is not None else None

    def delete_filter(self, name: str) -> bool:
        """Remove a saved filter; returns whether one existed."""
        with self._lock:
            removed = self._saved_filters.pop(name, None) is not None
        if removed:
            logger.debug("Deleted filter '%s'", name)
        return removed

    # --- Suggestions ---

    def get_suggestions(self, query: str, documents: Sequence[Document]) -> list[str]:
        return generate_suggestions(query, documents, limit=self._suggestion_limit)


def _raise_if_cancelled(cancel_event: asyncio.Event | None) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise SearchCancelledError("Search cancelled by caller")


async def _until_cancelled(
    scoring: Awaitable[RelevanceMatch],
    cancel_event: asyncio.Event,
) -> RelevanceMatch:
    """Await scoring unless the cancel event fires first."""
    score_task = asyncio.ensure_future(scoring)
    cancel_task = asyncio.ensure_future(cancel_event.wait())
    try:
        await asyncio.wait({score_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        score_task.cancel()
        raise
    finally:
        cancel_task.cancel()

    if not score_task.done():
        score_task.cancel()
        raise SearchCancelledError("Search cancelled by caller")
    return score_task.result()

"""
Suggestion Generator - Autocomplete candidates for a partial query.
"""

from __future__ import annotations

from collections.abc import Sequence
from itertools import chain

from .models import Document

__all__ = ["generate_suggestions"]


def generate_suggestions(
    query: str,
    documents: Sequence[Document],
    limit: int = 10,
) -> list[str]:
    """
    Collect document names, categories and tags containing ``query``.

    Candidates are merged in that order, deduplicated by exact string and
    truncated to ``limit``. A blank query yields no suggestions.
    """
    if not query.strip():
        return []

    query_lower = query.lower()
    candidates = chain(
        (doc.name for doc in documents),
        (doc.category for doc in documents),
        (tag for doc in documents for tag in doc.tags),
    )

    suggestions: dict[str, None] = {}
    for candidate in candidates:
        if len(suggestions) >= limit:
            break
        if query_lower in candidate.lower():
            suggestions.setdefault(candidate, None)
    return list(suggestions)

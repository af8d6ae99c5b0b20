"""
Filter Engine - Structured predicates applied before scoring.

Dimensions combine with AND; set-valued dimensions match on membership of
any one value.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timezone

from .models import DateRange, Document, SearchFilters, SizeRange

logger = logging.getLogger(__name__)

__all__ = ["apply_filters", "matches_filters", "parse_timestamp"]


def parse_timestamp(value: str | None) -> datetime | None:
    """
    Parse an ISO-8601 date or datetime.

    Aware values are converted to naive UTC so they compare with naive ones.
    Returns None for missing or unparsable input.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def apply_filters(
    documents: Iterable[Document],
    filters: SearchFilters | None,
) -> list[Document]:
    """
    Keep documents passing every populated filter dimension.

    Args:
        documents: Corpus to filter
        filters: Predicates; None keeps everything

    Returns:
        Surviving documents in corpus order
    """
    if filters is None:
        return list(documents)
    return [doc for doc in documents if matches_filters(doc, filters)]


def matches_filters(document: Document, filters: SearchFilters) -> bool:
    """Check a single document against all filter dimensions."""
    if filters.category and document.category not in filters.category:
        return False
    if filters.type and document.type not in filters.type:
        return False
    if filters.project and document.project_id not in filters.project:
        return False
    if filters.date_range and not _matches_date_range(document, filters.date_range):
        return False
    if filters.size_range and not _matches_size_range(document, filters.size_range):
        return False
    if filters.tags and not any(tag in filters.tags for tag in document.tags):
        return False
    return True


def _matches_date_range(document: Document, date_range: DateRange) -> bool:
    start = parse_timestamp(date_range.start)
    end = parse_timestamp(date_range.end)
    if date_range.start and start is None:
        logger.debug("Ignoring unparsable start date: %r", date_range.start)
    if date_range.end and end is None:
        logger.debug("Ignoring unparsable end date: %r", date_range.end)
    if start is None and end is None:
        return True

    uploaded = parse_timestamp(document.upload_date)
    if uploaded is None:
        return False
    if start is not None and uploaded < start:
        return False
    if end is not None and uploaded > end:
        return False
    return True


def _matches_size_range(document: Document, size_range: SizeRange) -> bool:
    if size_range.min is not None and document.size < size_range.min:
        return False
    if size_range.max is not None and document.size > size_range.max:
        return False
    return True

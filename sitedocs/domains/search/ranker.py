"""
Result Ranker - Stable ordering of scored results.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any

from .filters import parse_timestamp
from .models import SearchResult, SortBy, SortOrder

__all__ = ["sort_results", "collation_key"]


def collation_key(text: str) -> tuple[str, str]:
    """
    Locale-style sort key: accents and case are ignored first, then used to
    break ties ("árbol" sorts with "arbol", before "Barra").
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return base.casefold(), text


def _date_key(result: SearchResult) -> datetime:
    return parse_timestamp(result.document.upload_date) or datetime.min


# (key, descending) pairs giving each sort key's base order
_BASE_ORDER: dict[SortBy, tuple[Callable[[SearchResult], Any], bool]] = {
    SortBy.RELEVANCE: (lambda r: r.score, True),
    SortBy.DATE: (_date_key, True),
    SortBy.NAME: (lambda r: collation_key(r.document.name), False),
    SortBy.SIZE: (lambda r: r.document.size, True),
}


def sort_results(
    results: Iterable[SearchResult],
    sort_by: SortBy = SortBy.RELEVANCE,
    sort_order: SortOrder = SortOrder.DESC,
) -> list[SearchResult]:
    """
    Order results by the requested key.

    ``desc`` keeps each key's base order (highest score, newest, A-Z name,
    largest size first); ``asc`` inverts it. Ties keep their input order.

    Args:
        results: Scored results in pipeline order
        sort_by: Sort key
        sort_order: Direction relative to the key's base order

    Returns:
        New ordered list
    """
    key, descending = _BASE_ORDER[SortBy(sort_by)]
    if SortOrder(sort_order) is SortOrder.ASC:
        descending = not descending
    return sorted(results, key=key, reverse=descending)

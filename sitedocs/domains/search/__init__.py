"""
Search Domain - Relevance search over document corpora.

This domain handles:
- Structured filtering (category, type, project, date, size, tags)
- Substring relevance scoring over metadata, content and tags
- Highlight generation
- Stable multi-key ranking and pagination
- Search history, saved filters and suggestions
"""

from .contracts import DocumentRepository, Scorer, SearchEngine
from .engine import DocumentSearchEngine
from .filters import apply_filters
from .metadata import extract_metadata
from .models import (
    DateRange,
    Document,
    Highlights,
    MetadataHighlight,
    RelevanceMatch,
    SavedFilter,
    SearchFilters,
    SearchOptions,
    SearchPage,
    SearchResult,
    SizeRange,
    SortBy,
    SortOrder,
)
from .ranker import sort_results
from .scorer import RelevanceScorer, highlight
from .suggestions import generate_suggestions

__all__ = [
    # Contracts
    "SearchEngine",
    "Scorer",
    "DocumentRepository",
    # Models
    "Document",
    "SearchOptions",
    "SearchFilters",
    "DateRange",
    "SizeRange",
    "SortBy",
    "SortOrder",
    "SearchResult",
    "SearchPage",
    "Highlights",
    "MetadataHighlight",
    "RelevanceMatch",
    "SavedFilter",
    # Implementations
    "DocumentSearchEngine",
    "RelevanceScorer",
    "apply_filters",
    "extract_metadata",
    "generate_suggestions",
    "highlight",
    "sort_results",
]

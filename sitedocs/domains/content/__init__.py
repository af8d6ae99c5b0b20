"""
Content Domain - Extracted document text consumed by the search engine.

This domain handles:
- The content provider contract (OCR/text extraction happens upstream)
- Deterministic in-memory providers
- Providers backed by the document repository
"""

from .contracts import ContentProvider
from .models import ExtractedContent, PageContent
from .providers import RepositoryContentProvider, StaticContentProvider

__all__ = [
    # Contracts
    "ContentProvider",
    # Models
    "ExtractedContent",
    "PageContent",
    # Implementations
    "StaticContentProvider",
    "RepositoryContentProvider",
]

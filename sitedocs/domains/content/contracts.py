"""
Content Contracts - Interfaces for content providers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .models import ExtractedContent

if TYPE_CHECKING:
    from sitedocs.domains.search.models import Document


@runtime_checkable
class ContentProvider(Protocol):
    """
    Contract for supplying extracted document text.

    Implementations may be slow (real OCR is I/O bound); callers apply their
    own timeout and treat failures as "no content".

    Example:
        >>> class MyProvider:
        ...     async def extract_content(self, document: Document) -> ExtractedContent:
        ...         ...
        >>> assert isinstance(MyProvider(), ContentProvider)
    """

    async def extract_content(self, document: Document) -> ExtractedContent:
        """
        Return the extracted text for a document.

        Args:
            document: Document whose content is requested

        Returns:
            Extracted text with confidence and optional per-page breakdown
        """
        ...

"""
Content Models - Extracted text for a single document.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class PageContent(BaseModel):
    """Text extracted from one page."""

    page: int = Field(..., ge=1)
    text: str
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)


class ExtractedContent(BaseModel):
    """
    Text extracted from a document.

    Confidence is informational only; scoring never reads it.
    """

    text: str = ""
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    pages: list[PageContent] = Field(default_factory=list)

    model_config = {"frozen": True}

    @classmethod
    def empty(cls) -> ExtractedContent:
        """Content for documents with no extractable text."""
        return cls(text="", confidence=0.0)

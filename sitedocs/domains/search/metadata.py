"""
Metadata Extractor - Flat field -> text view of a document.
"""

from __future__ import annotations

from .models import Document

__all__ = ["METADATA_FIELDS", "extract_metadata"]

METADATA_FIELDS = (
    "name",
    "type",
    "category",
    "project",
    "uploadDate",
    "size",
    "tags",
    "description",
)


def extract_metadata(document: Document) -> dict[str, str]:
    """
    Build the searchable metadata mapping for a document.

    Keys follow ``METADATA_FIELDS`` order. Missing project and description
    become empty strings; tags are joined with single spaces.
    """
    return {
        "name": document.name,
        "type": document.type,
        "category": document.category,
        "project": document.project_name or "",
        "uploadDate": document.upload_date,
        "size": str(document.size),
        "tags": " ".join(document.tags),
        "description": document.description or "",
    }

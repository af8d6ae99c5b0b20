"""SQLite adapter - document repository."""

from .repository import SQLiteDocumentRepository

__all__ = ["SQLiteDocumentRepository"]

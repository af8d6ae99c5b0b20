"""
CLI Interface - Command-line tools for SiteDocs.

Provides commands for:
- Relevance search over a JSON corpus or the database
- Search suggestions
- Corpus import
- API server management
"""

from .main import app, main

__all__ = ["app", "main"]

"""
SiteDocs - Relevance search over construction-project document corpora.

Example:
    >>> from sitedocs.domains.search import DocumentSearchEngine, SearchOptions
    >>> engine = DocumentSearchEngine()
    >>> results = await engine.search(documents, SearchOptions(query="plano"))
"""

__version__ = "1.0.0"
__all__ = ["__version__"]

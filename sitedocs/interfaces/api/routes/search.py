"""
Search Routes - Document search, suggestions, history and saved filters.

The corpus is loaded from the document repository on every request.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel, Field

from sitedocs.adapters.sqlite import SQLiteDocumentRepository
from sitedocs.config.errors import NotFoundError
from sitedocs.domains.search import (
    DocumentRepository,
    DocumentSearchEngine,
    SavedFilter,
    SearchOptions,
    SearchResult,
)
from sitedocs.domains.search.models import CamelModel
from sitedocs.interfaces.api.deps import get_document_repository, get_search_engine

router = APIRouter()


class SearchResponse(CamelModel):
    """One page of results; ``total`` counts every match before pagination."""

    query: str
    results: list[SearchResult]
    total: int


class SuggestionsResponse(BaseModel):
    """Autocomplete response."""

    query: str
    suggestions: list[str]


class HistoryResponse(BaseModel):
    """Search history, most recent first."""

    history: list[str] = Field(default_factory=list)


async def _run_search(
    options: SearchOptions,
    engine: DocumentSearchEngine,
    repo: DocumentRepository,
) -> SearchResponse:
    documents = await repo.list_documents()
    page = await engine.search_page(documents, options)
    return SearchResponse(query=options.query, results=page.results, total=page.total)


@router.post("", response_model=SearchResponse)
async def search(
    options: SearchOptions,
    engine: DocumentSearchEngine = Depends(get_search_engine),
    repo: SQLiteDocumentRepository = Depends(get_document_repository),
):
    """
    Search documents.

    - **query**: Free text; empty means filters only
    - **filters**: category/type/project/tags sets, dateRange, sizeRange
    - **sortBy** / **sortOrder**: relevance, date, name or size
    - **limit** / **offset**: Pagination
    """
    return await _run_search(options, engine, repo)


@router.get("/suggestions", response_model=SuggestionsResponse)
async def suggestions(
    q: str = Query(default="", description="Partial query"),
    engine: DocumentSearchEngine = Depends(get_search_engine),
    repo: SQLiteDocumentRepository = Depends(get_document_repository),
):
    """Suggest document names, categories and tags containing the partial query."""
    documents = await repo.list_documents()
    return SuggestionsResponse(query=q, suggestions=engine.get_suggestions(q, documents))


@router.get("/history", response_model=HistoryResponse)
async def history(engine: DocumentSearchEngine = Depends(get_search_engine)):
    """Recent distinct queries, most recent first."""
    return HistoryResponse(history=engine.get_history())


@router.get("/filters", response_model=list[SavedFilter])
async def list_filters(engine: DocumentSearchEngine = Depends(get_search_engine)):
    """Saved filters in the order they were first saved."""
    return engine.get_saved_filters()


@router.put("/filters/{name}", response_model=SavedFilter)
async def save_filter(
    name: str,
    options: SearchOptions,
    engine: DocumentSearchEngine = Depends(get_search_engine),
):
    """Save (or replace) a named filter."""
    engine.save_filter(name, options)
    return SavedFilter(name=name, options=options)


@router.delete("/filters/{name}", status_code=204)
async def delete_filter(
    name: str,
    engine: DocumentSearchEngine = Depends(get_search_engine),
):
    """Delete a saved filter."""
    if not engine.delete_filter(name):
        raise _filter_not_found(name)
    return Response(status_code=204)


@router.post("/filters/{name}/apply", response_model=SearchResponse)
async def apply_filter(
    name: str,
    engine: DocumentSearchEngine = Depends(get_search_engine),
    repo: SQLiteDocumentRepository = Depends(get_document_repository),
):
    """Run a search with the options stored under a saved filter."""
    options = engine.get_saved_filter(name)
    if options is None:
        raise _filter_not_found(name)
    return await _run_search(options, engine, repo)


def _filter_not_found(name: str) -> NotFoundError:
    return NotFoundError(f"Saved filter not found: {name}", {"name": name})

"""
Search Models - Data types for search domain.

Python attributes are snake_case; JSON uses the camelCase names of the
document API (``uploadDate``, ``searchInContent``, ``sortBy``...). Both are
accepted on input.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialising with camelCase aliases."""

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


def _isoformat(value: Any) -> Any:
    """Normalise date/datetime inputs to ISO-8601 text; pass anything else through."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


class Document(CamelModel):
    """Document record supplied by the repository. Never mutated by search."""

    id: str
    name: str
    type: str
    category: str = ""
    project_id: str | None = None
    project_name: str | None = None
    upload_date: str = ""
    size: int = Field(default=0, ge=0)
    tags: list[str] = Field(default_factory=list)
    description: str | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "frozen": True}

    @field_validator("upload_date", mode="before")
    @classmethod
    def normalise_upload_date(cls, value: Any) -> Any:
        return _isoformat(value)


class SortBy(str, Enum):
    """Result ordering key."""

    RELEVANCE = "relevance"
    DATE = "date"
    NAME = "name"
    SIZE = "size"


class SortOrder(str, Enum):
    """Result ordering direction."""

    ASC = "asc"
    DESC = "desc"


class DateRange(CamelModel):
    """Upload date bounds; either side may be open."""

    start: str | None = None
    end: str | None = None

    @field_validator("start", "end", mode="before")
    @classmethod
    def normalise_bound(cls, value: Any) -> Any:
        return _isoformat(value)


class SizeRange(CamelModel):
    """Size bounds in bytes; either side may be open."""

    min: int | None = None
    max: int | None = None


class SearchFilters(CamelModel):
    """Structured predicates. Empty or missing fields do not constrain."""

    category: list[str] = Field(default_factory=list)
    type: list[str] = Field(default_factory=list)
    project: list[str] = Field(default_factory=list)
    date_range: DateRange | None = None
    size_range: SizeRange | None = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("category", "type", "project", "tags", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class SearchOptions(CamelModel):
    """Search request."""

    query: str = ""
    search_in_content: bool = True
    search_in_metadata: bool = True
    filters: SearchFilters = Field(default_factory=SearchFilters)
    sort_by: SortBy = SortBy.RELEVANCE
    sort_order: SortOrder = SortOrder.DESC
    limit: int = Field(default=50, ge=0)
    offset: int = Field(default=0, ge=0)

    @field_validator("filters", mode="before")
    @classmethod
    def null_filters(cls, value: Any) -> Any:
        return SearchFilters() if value is None else value


class MetadataHighlight(CamelModel):
    """Highlighted metadata field value."""

    field: str
    text: str


class Highlights(CamelModel):
    """Rendering-ready fragments marking where the query was found."""

    content: list[str] = Field(default_factory=list)
    metadata: list[MetadataHighlight] = Field(default_factory=list)


class RelevanceMatch(CamelModel):
    """Scorer output for one document."""

    score: int = 0
    highlights: Highlights = Field(default_factory=Highlights)
    matched_fields: list[str] = Field(default_factory=list)


class SearchResult(CamelModel):
    """Single search result. ``document`` is the corpus instance, not a copy."""

    document: Document
    score: int
    highlights: Highlights = Field(default_factory=Highlights)
    matched_fields: list[str] = Field(default_factory=list)


class SearchPage(CamelModel):
    """One page of results plus the number of matches before pagination."""

    results: list[SearchResult] = Field(default_factory=list)
    total: int = 0


class SavedFilter(CamelModel):
    """Named snapshot of search options."""

    name: str
    options: SearchOptions

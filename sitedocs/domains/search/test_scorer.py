"""
Tests for metadata extraction, highlighting and relevance scoring.
"""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from sitedocs.domains.content import ExtractedContent, StaticContentProvider

from .contracts import Scorer
from .metadata import METADATA_FIELDS, extract_metadata
from .models import Document
from .scorer import RelevanceScorer, highlight


@pytest.fixture
def plano() -> Document:
    return Document(
        id="doc-1",
        name="Plano Estructural A",
        type="pdf",
        category="tecnico",
        project_id="p-1",
        project_name="Torre Norte",
        upload_date="2024-01-15",
        size=1024,
        tags=["estructura"],
    )


# --- Metadata Extractor Tests ---


def test_extract_metadata_fields(plano: Document) -> None:
    """Test every metadata field is stringified in order."""
    metadata = extract_metadata(plano)

    assert tuple(metadata) == METADATA_FIELDS
    assert metadata["project"] == "Torre Norte"
    assert metadata["uploadDate"] == "2024-01-15"
    assert metadata["size"] == "1024"
    assert metadata["tags"] == "estructura"
    assert metadata["description"] == ""


def test_extract_metadata_defaults() -> None:
    """Test missing project and description become empty strings."""
    doc = Document(id="x", name="Foto", type="jpg", tags=["a", "b", "a"])
    metadata = extract_metadata(doc)

    assert metadata["project"] == ""
    assert metadata["description"] == ""
    assert metadata["tags"] == "a b a"


# --- Highlight Tests ---


def test_highlight_is_case_insensitive() -> None:
    """Test every occurrence is wrapped, preserving original case."""
    assert highlight("Plano y PLANO", "plano") == "<mark>Plano</mark> y <mark>PLANO</mark>"


def test_highlight_escapes_metacharacters() -> None:
    """Test regex metacharacters in the query are literal."""
    assert highlight("Costo (total) $5.00", "(total)") == "Costo <mark>(total)</mark> $5.00"
    assert highlight("a+b", "+") == "a<mark>+</mark>b"
    assert highlight("Factura [1]", "[") == "Factura <mark>[</mark>1]"


# --- Scorer Tests ---


def test_scorer_satisfies_contract() -> None:
    """Test RelevanceScorer matches the Scorer protocol."""
    assert isinstance(RelevanceScorer(), Scorer)


async def test_name_match_scores_ten(plano: Document) -> None:
    """Test a name-only match scores +10."""
    scorer = RelevanceScorer(StaticContentProvider({"doc-1": "Cargas de viento."}))
    match = await scorer.score(plano, "plano")

    assert match.score == 10
    assert match.matched_fields == ["name"]
    assert match.highlights.metadata[0].field == "name"
    assert match.highlights.metadata[0].text == "<mark>Plano</mark> Estructural A"
    assert match.highlights.content == []


async def test_other_metadata_field_scores_five(plano: Document) -> None:
    """Test a non-name metadata match scores +5."""
    match = await RelevanceScorer().score(plano, "torre")

    assert match.score == 5
    assert match.matched_fields == ["project"]


async def test_tags_accumulate_per_match() -> None:
    """Test each matching tag adds +7 and one 'tags' entry."""
    doc = Document(id="x", name="Foto", type="jpg", tags=["obra", "obra gruesa", "acero"])
    match = await RelevanceScorer().score(doc, "obra", search_in_metadata=False)

    assert match.score == 14
    assert match.matched_fields == ["tags", "tags"]


async def test_tags_match_with_metadata_enabled() -> None:
    """Test tags score both as a metadata field and per tag."""
    doc = Document(id="x", name="Foto", type="jpg", tags=["obra"])
    match = await RelevanceScorer().score(doc, "obra")

    assert match.score == 5 + 7
    assert match.matched_fields == ["tags", "tags"]


async def test_metadata_toggle_disables_field_matches(plano: Document) -> None:
    """Test disabling metadata skips field matching."""
    match = await RelevanceScorer().score(plano, "plano", search_in_metadata=False)
    assert match.score == 0
    assert match.matched_fields == []


async def test_content_match_scores_three_with_sentences() -> None:
    """Test content match scores +3 with at most three highlighted sentences."""
    doc = Document(id="d", name="Memoria", type="docx")
    text = "Viga uno. Losa dos! Viga tres? Columna. Viga cuatro. Viga cinco."
    scorer = RelevanceScorer(StaticContentProvider({"d": text}))

    match = await scorer.score(doc, "viga")

    assert match.score == 3
    assert match.matched_fields == ["content"]
    assert match.highlights.content == [
        "<mark>Viga</mark> uno",
        " <mark>Viga</mark> tres",
        " <mark>Viga</mark> cuatro",
    ]


async def test_content_ignored_for_non_text_types() -> None:
    """Test images never contribute content score."""
    provider = AsyncMock()
    provider.extract_content.return_value = ExtractedContent(text="viga")
    doc = Document(id="d", name="Foto", type="jpg")

    match = await RelevanceScorer(provider).score(doc, "viga")

    assert match.score == 0
    provider.extract_content.assert_not_called()


async def test_content_toggle_disables_provider() -> None:
    """Test disabling content skips the provider entirely."""
    provider = AsyncMock()
    doc = Document(id="d", name="Memoria", type="pdf")

    await RelevanceScorer(provider).score(doc, "viga", search_in_content=False)
    provider.extract_content.assert_not_called()


async def test_provider_failure_degrades_to_no_content() -> None:
    """Test provider exceptions zero the content score for that document."""
    provider = AsyncMock()
    provider.extract_content.side_effect = RuntimeError("OCR backend down")
    doc = Document(id="d", name="Viga principal", type="pdf")

    match = await RelevanceScorer(provider).score(doc, "viga")

    assert match.score == 10
    assert "content" not in match.matched_fields


async def test_provider_timeout_degrades_to_no_content() -> None:
    """Test slow providers are abandoned after the timeout."""

    class SlowProvider:
        async def extract_content(self, document: Document) -> ExtractedContent:
            await asyncio.sleep(5)
            return ExtractedContent(text="viga")

    doc = Document(id="d", name="Memoria", type="pdf")
    match = await RelevanceScorer(SlowProvider(), content_timeout=0.01).score(doc, "viga")

    assert match.score == 0
    assert match.matched_fields == []


async def test_metacharacter_query_does_not_crash() -> None:
    """Test queries with regex syntax are matched literally."""
    doc = Document(id="d", name="Presupuesto (v2) [final]", type="pdf")
    match = await RelevanceScorer().score(doc, "(v2) [")

    assert match.score == 10
    assert match.highlights.metadata[0].text == "Presupuesto <mark>(v2) [</mark>final]"


async def test_empty_query_scores_zero(plano: Document) -> None:
    """Test the scorer treats an empty query as no match."""
    match = await RelevanceScorer().score(plano, "")
    assert match.score == 0

"""Tests for API Routes."""

from collections.abc import Generator
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from sitedocs.config.errors import ErrorCode, StorageError
from sitedocs.domains.content import StaticContentProvider
from sitedocs.domains.search import Document, DocumentSearchEngine

from .deps import get_document_repository, get_search_engine
from .main import create_app
from .middleware import error_status


@pytest.fixture
def documents() -> list[Document]:
    return [
        Document(
            id="doc-1",
            name="Plano Estructural A",
            type="pdf",
            category="tecnico",
            project_id="p-1",
            upload_date="2024-01-15",
            size=2048,
            tags=["estructura"],
        ),
        Document(
            id="doc-2",
            name="Factura 001",
            type="pdf",
            category="contable",
            project_id="p-2",
            upload_date="2024-02-01",
            size=512,
            tags=["finanzas"],
        ),
    ]


@pytest.fixture
def mock_repo(documents: list[Document]) -> AsyncMock:
    """Create a mock document repository."""
    mock = AsyncMock()
    mock.list_documents.return_value = documents
    return mock


@pytest.fixture
def engine() -> DocumentSearchEngine:
    return DocumentSearchEngine(StaticContentProvider())


@pytest.fixture
def client(
    mock_repo: AsyncMock, engine: DocumentSearchEngine
) -> Generator[TestClient, None, None]:
    """Create a test client with mocked dependencies."""
    app = create_app()

    app.dependency_overrides[get_document_repository] = lambda: mock_repo
    app.dependency_overrides[get_search_engine] = lambda: engine

    yield TestClient(app)

    app.dependency_overrides.clear()


def test_health_endpoint(client: TestClient) -> None:
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_api_info(client: TestClient) -> None:
    """Test API info endpoint."""
    data = client.get("/api").json()
    assert data["name"] == "SiteDocs API"


def test_search_endpoint_basic(client: TestClient) -> None:
    """Test a name match through the API."""
    response = client.post("/api/search", json={"query": "plano"})

    assert response.status_code == 200
    data = response.json()
    assert data["query"] == "plano"
    assert data["total"] == 1

    result = data["results"][0]
    assert result["document"]["name"] == "Plano Estructural A"
    assert result["document"]["uploadDate"] == "2024-01-15"
    assert result["score"] == 10
    assert result["matchedFields"] == ["name"]
    assert result["highlights"]["metadata"] == [
        {"field": "name", "text": "<mark>Plano</mark> Estructural A"}
    ]


def test_search_endpoint_filters_only(client: TestClient) -> None:
    """Test empty query with camelCase filters."""
    response = client.post(
        "/api/search",
        json={"query": "", "filters": {"type": ["pdf"], "sizeRange": {"min": 1000}}},
    )

    assert response.status_code == 200
    results = response.json()["results"]
    assert [r["document"]["id"] for r in results] == ["doc-1"]
    assert results[0]["score"] == 1


def test_search_endpoint_sorting_and_pagination(client: TestClient) -> None:
    """Test sortBy/sortOrder/limit/offset are honoured."""
    body = {"query": "pdf", "sortBy": "size", "sortOrder": "asc", "limit": 1, "offset": 1}
    data = client.post("/api/search", json=body).json()
    assert [r["document"]["id"] for r in data["results"]] == ["doc-1"]
    assert data["total"] == 2


def test_search_endpoint_null_filters(client: TestClient) -> None:
    """Test null filters are accepted and do not constrain."""
    response = client.post(
        "/api/search", json={"query": "", "filters": {"category": None, "tags": None}}
    )
    assert response.status_code == 200
    assert response.json()["total"] == 2

    response = client.post("/api/search", json={"query": "pdf", "filters": None})
    assert response.status_code == 200
    assert response.json()["total"] == 2


def test_search_endpoint_validation(client: TestClient) -> None:
    """Test invalid options are rejected."""
    assert client.post("/api/search", json={"query": "x", "limit": -1}).status_code == 422
    assert client.post("/api/search", json={"query": "x", "sortBy": "color"}).status_code == 422


def test_search_storage_error(client: TestClient, mock_repo: AsyncMock) -> None:
    """Test repository failures map to structured 503 responses."""
    mock_repo.list_documents.side_effect = StorageError("database locked")

    response = client.post("/api/search", json={"query": "plano"})

    assert response.status_code == 503
    assert response.json()["error"]["code"] == ErrorCode.STORAGE_READ_FAILED.value


def test_suggestions_endpoint(client: TestClient) -> None:
    """Test suggestions endpoint."""
    data = client.get("/api/search/suggestions", params={"q": "fin"}).json()
    assert data == {"query": "fin", "suggestions": ["finanzas"]}


def test_history_endpoint(client: TestClient) -> None:
    """Test history reflects previous searches."""
    client.post("/api/search", json={"query": "plano"})
    client.post("/api/search", json={"query": "factura"})

    assert client.get("/api/search/history").json() == {"history": ["factura", "plano"]}


def test_saved_filter_lifecycle(client: TestClient) -> None:
    """Test save, list, apply and delete of a named filter."""
    options = {"query": "", "filters": {"project": ["p-2"]}}

    response = client.put("/api/search/filters/contables", json=options)
    assert response.status_code == 200
    assert response.json()["name"] == "contables"

    saved = client.get("/api/search/filters").json()
    assert [f["name"] for f in saved] == ["contables"]
    assert saved[0]["options"]["filters"]["project"] == ["p-2"]

    applied = client.post("/api/search/filters/contables/apply").json()
    assert [r["document"]["id"] for r in applied["results"]] == ["doc-2"]

    assert client.delete("/api/search/filters/contables").status_code == 204
    assert client.get("/api/search/filters").json() == []


def test_delete_missing_filter_returns_404(client: TestClient) -> None:
    """Test deleting an unknown filter."""
    response = client.delete("/api/search/filters/missing")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == ErrorCode.NOT_FOUND.value


def test_apply_missing_filter_returns_404(client: TestClient) -> None:
    """Test applying an unknown filter."""
    assert client.post("/api/search/filters/missing/apply").status_code == 404


def test_request_id_header(client: TestClient) -> None:
    """Test that responses include request ID."""
    response = client.get("/health", headers={"X-Request-ID": "abc"})
    assert response.headers["x-request-id"] == "abc"


def test_404_for_unknown_routes(client: TestClient) -> None:
    """Test 404 for non-existent routes."""
    assert client.get("/api/nonexistent").status_code == 404


def test_error_status_mapping() -> None:
    """Test taxonomy codes map to HTTP statuses."""
    assert error_status(ErrorCode.NOT_FOUND) == 404
    assert error_status(ErrorCode.SEARCH_CANCELLED) == 409
    assert error_status(ErrorCode.INTERNAL_ERROR) == 500

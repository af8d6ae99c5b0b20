"""
SQLite Repository - Document metadata and extracted content storage.

Features:
- Async operations via aiosqlite
- Document records with JSON-encoded tags
- Extracted text per document for the content provider
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import aiosqlite

from sitedocs.config.errors import StorageError
from sitedocs.domains.content.models import ExtractedContent, PageContent
from sitedocs.domains.search.models import Document

logger = logging.getLogger(__name__)

__all__ = ["SQLiteDocumentRepository"]


class SQLiteDocumentRepository:
    """
    SQLite repository supplying the search corpus.

    Example:
        >>> repo = SQLiteDocumentRepository("data/sitedocs.db")
        >>> await repo.initialize()
        >>> await repo.insert_document(document, content="Planos estructurales.")
        >>> corpus = await repo.list_documents()
    """

    def __init__(self, db_path: str | Path) -> None:
        """
        Initialize repository.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection: aiosqlite.Connection | None = None

    async def _get_connection(self) -> aiosqlite.Connection:
        """Get or create database connection."""
        if self._connection is None:
            try:
                self._connection = await aiosqlite.connect(str(self.db_path))
            except Exception as e:
                raise StorageError(
                    "Could not open document database",
                    {"db_path": str(self.db_path), "error": str(e)},
                ) from e
            self._connection.row_factory = aiosqlite.Row
        return self._connection

    async def initialize(self) -> None:
        """Initialize database schema."""
        conn = await self._get_connection()

        await conn.executescript("""
            -- Documents table
            CREATE TABLE IF NOT EXISTS documents (
                seq INTEGER PRIMARY KEY AUTOINCREMENT,
                id TEXT NOT NULL UNIQUE,
                name TEXT NOT NULL,
                type TEXT NOT NULL,
                category TEXT NOT NULL DEFAULT '',
                project_id TEXT,
                project_name TEXT,
                upload_date TEXT NOT NULL DEFAULT '',
                size INTEGER NOT NULL DEFAULT 0,
                tags TEXT NOT NULL DEFAULT '[]',
                description TEXT
            );

            -- Extracted text (OCR output) per document
            CREATE TABLE IF NOT EXISTS document_content (
                document_id TEXT PRIMARY KEY,
                text TEXT NOT NULL,
                confidence REAL NOT NULL DEFAULT 1.0,
                pages TEXT,
                FOREIGN KEY (document_id) REFERENCES documents(id)
            );

            -- Indexes
            CREATE INDEX IF NOT EXISTS idx_documents_category ON documents(category);
            CREATE INDEX IF NOT EXISTS idx_documents_project ON documents(project_id);
        """)

        await conn.commit()
        logger.info("Database initialized: %s", self.db_path)

    async def insert_document(
        self,
        document: Document,
        content: str | None = None,
        confidence: float = 1.0,
    ) -> None:
        """
        Insert or replace a document and, optionally, its extracted text.

        Args:
            document: Document record
            content: Extracted text
            confidence: Extraction confidence for the text
        """
        conn = await self._get_connection()

        await conn.execute(
            """
            INSERT INTO documents
            (id, name, type, category, project_id, project_name, upload_date, size, tags, description)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                name = excluded.name,
                type = excluded.type,
                category = excluded.category,
                project_id = excluded.project_id,
                project_name = excluded.project_name,
                upload_date = excluded.upload_date,
                size = excluded.size,
                tags = excluded.tags,
                description = excluded.description
            """,
            (
                document.id,
                document.name,
                document.type,
                document.category,
                document.project_id,
                document.project_name,
                document.upload_date,
                document.size,
                json.dumps(document.tags),
                document.description,
            ),
        )

        if content is not None:
            await conn.execute(
                """
                INSERT OR REPLACE INTO document_content (document_id, text, confidence, pages)
                VALUES (?, ?, ?, ?)
                """,
                (
                    document.id,
                    content,
                    confidence,
                    json.dumps([{"page": 1, "text": content, "confidence": confidence}]),
                ),
            )

        await conn.commit()

    async def get_document(self, document_id: str) -> Document | None:
        """Get document by ID."""
        conn = await self._get_connection()

        cursor = await conn.execute("SELECT * FROM documents WHERE id = ?", (document_id,))
        row = await cursor.fetchone()

        if row:
            return self._row_to_document(dict(row))
        return None

    async def list_documents(self) -> list[Document]:
        """Return the full corpus in insertion order."""
        conn = await self._get_connection()

        cursor = await conn.execute("SELECT * FROM documents ORDER BY seq")
        rows = await cursor.fetchall()

        return [self._row_to_document(dict(row)) for row in rows]

    async def get_content(self, document_id: str) -> ExtractedContent | None:
        """Get stored extracted text for a document."""
        conn = await self._get_connection()

        cursor = await conn.execute(
            "SELECT text, confidence, pages FROM document_content WHERE document_id = ?",
            (document_id,),
        )
        row = await cursor.fetchone()
        if not row:
            return None

        pages = json.loads(row["pages"]) if row["pages"] else []
        return ExtractedContent(
            text=row["text"],
            confidence=row["confidence"],
            pages=[PageContent(**page) for page in pages],
        )

    async def get_document_count(self) -> int:
        """Get total document count."""
        conn = await self._get_connection()
        cursor = await conn.execute("SELECT COUNT(*) FROM documents")
        row = await cursor.fetchone()
        return row[0] if row else 0

    async def close(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    @staticmethod
    def _row_to_document(row: dict[str, Any]) -> Document:
        return Document(
            id=row["id"],
            name=row["name"],
            type=row["type"],
            category=row["category"],
            project_id=row["project_id"],
            project_name=row["project_name"],
            upload_date=row["upload_date"],
            size=row["size"],
            tags=json.loads(row["tags"] or "[]"),
            description=row["description"],
        )

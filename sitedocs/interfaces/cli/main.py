"""
CLI Main - Typer-based command-line interface.

Usage:
    sitedocs import corpus.json
    sitedocs search "plano" --type pdf --sort-by date
    sitedocs suggest "pla"
    sitedocs serve
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from sitedocs.domains.search import (
    Document,
    SearchFilters,
    SearchOptions,
    SearchResult,
    SortBy,
    SortOrder,
)

app = typer.Typer(
    name="sitedocs",
    help="SiteDocs - Construction document search",
    add_completion=False,
)
console = Console()


def load_corpus(path: Path) -> tuple[list[Document], dict[str, str]]:
    """
    Read a JSON corpus file.

    The file holds a list of document objects; an optional ``content`` key on
    each object carries its extracted text.

    Returns:
        Documents and a mapping of document id to content text
    """
    records = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(records, list):
        raise ValueError("Corpus file must contain a JSON list of documents")

    documents: list[Document] = []
    contents: dict[str, str] = {}
    for record in records:
        content = record.pop("content", None)
        document = Document.model_validate(record)
        documents.append(document)
        if content is not None:
            contents[document.id] = content
    return documents, contents


@app.command()
def search(
    query: str = typer.Argument("", help="Search query; empty lists filtered documents"),
    corpus: Path | None = typer.Option(
        None, "--corpus", "-c", help="JSON corpus file (default: the database)"
    ),
    limit: int | None = typer.Option(None, "--limit", "-n", help="Number of results"),
    offset: int = typer.Option(0, "--offset", help="Results to skip"),
    sort_by: SortBy = typer.Option(SortBy.RELEVANCE, "--sort-by", "-s", help="Sort key"),
    ascending: bool = typer.Option(False, "--asc", help="Invert the sort order"),
    category: list[str] = typer.Option([], "--category", help="Category filter (repeatable)"),
    doc_type: list[str] = typer.Option([], "--type", "-t", help="Type filter (repeatable)"),
    tag: list[str] = typer.Option([], "--tag", help="Tag filter (repeatable)"),
    no_content: bool = typer.Option(False, "--no-content", help="Skip extracted content"),
) -> None:
    """Search documents by relevance."""
    from sitedocs.config import get_settings

    options = SearchOptions(
        query=query,
        search_in_content=not no_content,
        filters=SearchFilters(category=category, type=doc_type, tags=tag),
        sort_by=sort_by,
        sort_order=SortOrder.ASC if ascending else SortOrder.DESC,
        limit=limit if limit is not None else get_settings().search_default_limit,
        offset=offset,
    )
    asyncio.run(_search_async(options, corpus))


async def _search_async(options: SearchOptions, corpus: Path | None) -> None:
    """Async search implementation."""
    from sitedocs.config import get_settings
    from sitedocs.domains.content import RepositoryContentProvider, StaticContentProvider
    from sitedocs.domains.search import DocumentSearchEngine

    settings = get_settings()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("Searching...", total=None)

        if corpus is not None:
            documents, contents = _read_corpus_or_exit(corpus)
            engine = DocumentSearchEngine.from_settings(settings, StaticContentProvider(contents))
            results = await engine.search(documents, options)
        else:
            from sitedocs.adapters.sqlite import SQLiteDocumentRepository

            repo = SQLiteDocumentRepository(settings.db_path)
            try:
                await repo.initialize()
                documents = await repo.list_documents()
                engine = DocumentSearchEngine.from_settings(
                    settings, RepositoryContentProvider(repo)
                )
                results = await engine.search(documents, options)
            finally:
                await repo.close()

    _print_results(options.query, results, len(documents))


def _print_results(query: str, results: list[SearchResult], corpus_size: int) -> None:
    if not results:
        console.print(f"[yellow]No documents match[/yellow] '{query}'")
        return

    table = Table(title=f"Results for '{query}'" if query else "Filtered documents")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Type")
    table.add_column("Category")
    table.add_column("Uploaded")
    table.add_column("Score", style="green", justify="right")
    table.add_column("Matched")

    for rank, result in enumerate(results, 1):
        doc = result.document
        table.add_row(
            str(rank),
            doc.name,
            doc.type,
            doc.category,
            doc.upload_date,
            str(result.score),
            ", ".join(result.matched_fields),
        )

    console.print(table)
    console.print(f"[dim]{len(results)} shown, {corpus_size} documents searched[/dim]")


@app.command()
def suggest(
    query: str = typer.Argument(..., help="Partial query"),
    corpus: Path | None = typer.Option(
        None, "--corpus", "-c", help="JSON corpus file (default: the database)"
    ),
) -> None:
    """Suggest document names, categories and tags."""
    asyncio.run(_suggest_async(query, corpus))


async def _suggest_async(query: str, corpus: Path | None) -> None:
    from sitedocs.config import get_settings
    from sitedocs.domains.search import generate_suggestions

    settings = get_settings()

    if corpus is not None:
        documents, _ = _read_corpus_or_exit(corpus)
    else:
        from sitedocs.adapters.sqlite import SQLiteDocumentRepository

        repo = SQLiteDocumentRepository(settings.db_path)
        try:
            await repo.initialize()
            documents = await repo.list_documents()
        finally:
            await repo.close()

    suggestions = generate_suggestions(query, documents, limit=settings.suggestion_limit)
    if not suggestions:
        console.print("[yellow]No suggestions[/yellow]")
        return
    for suggestion in suggestions:
        console.print(f"  {suggestion}")


@app.command("import")
def import_corpus(
    corpus: Path = typer.Argument(..., help="JSON corpus file"),
    db_path: Path | None = typer.Option(None, "--db", help="Database path"),
) -> None:
    """Load a JSON corpus (with optional extracted content) into the database."""
    asyncio.run(_import_async(corpus, db_path))


async def _import_async(corpus: Path, db_path: Path | None) -> None:
    from sitedocs.adapters.sqlite import SQLiteDocumentRepository
    from sitedocs.config import get_settings

    documents, contents = _read_corpus_or_exit(corpus)
    repo = SQLiteDocumentRepository(db_path or get_settings().db_path)

    try:
        await repo.initialize()
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Importing documents...", total=len(documents))
            for document in documents:
                await repo.insert_document(document, content=contents.get(document.id))
                progress.advance(task)
        total = await repo.get_document_count()
    finally:
        await repo.close()

    console.print(f"\n[green]Imported {len(documents)} documents[/green] ({total} in database)")


def _read_corpus_or_exit(path: Path) -> tuple[list[Document], dict[str, str]]:
    if not path.exists():
        console.print(f"[red]Error:[/red] File not found: {path}")
        raise typer.Exit(1)
    try:
        return load_corpus(path)
    except (ValueError, ValidationError) as e:
        console.print(f"[red]Error:[/red] Invalid corpus file: {e}")
        raise typer.Exit(1)


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", "-h", help="Host to bind"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to bind"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload"),
) -> None:
    """Start the API server."""
    import uvicorn

    from sitedocs.config import get_settings

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    console.print("\n[green]Starting SiteDocs API server[/green]")
    console.print(f"[dim]http://{host}:{port}[/dim]\n")

    uvicorn.run(
        "sitedocs.interfaces.api:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


@app.command()
def version() -> None:
    """Show version information."""
    from sitedocs import __version__

    console.print(f"SiteDocs v{__version__}")


@app.callback()
def _configure(
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level"),
) -> None:
    from sitedocs.config import configure_logging

    configure_logging(log_level)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()

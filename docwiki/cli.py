"""CLI entry point for docwiki."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from docwiki.config import DocWikiConfig, load_config
from docwiki.config.loader import DEFAULT_CONFIG_TEMPLATE
from docwiki.converter import LocalFile, build_pipeline
from docwiki.errors import DocWikiError
from docwiki.formatting import format_bytes, format_date
from docwiki.kinds import DocumentKind
from docwiki.library import DocumentLibrary, IngestEvent, IngestEventType
from docwiki.sanitize import sanitize_html
from docwiki.store import SQLiteDocumentStore

app = typer.Typer(
    name="docwiki",
    help="Static document wiki: convert uploads to HTML and keep them searchable.",
)

config_app = typer.Typer(help="Manage docwiki configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: DocWikiConfig | None = None

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

_KIND_ICONS = {
    DocumentKind.markdown: "📝",
    DocumentKind.text: "📄",
    DocumentKind.pdf: "📕",
    DocumentKind.docx: "📘",
}


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def _configure_logging(cfg: DocWikiConfig) -> None:
    if cfg.log_format == "json":
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(_JsonFormatter())
    else:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
    logging.basicConfig(
        level=_LOG_LEVELS[cfg.log_level],
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def _get_config() -> DocWikiConfig:
    if _config is None:
        return load_config()
    return _config


def _open_store(cfg: DocWikiConfig) -> SQLiteDocumentStore:
    return SQLiteDocumentStore(
        cfg.store.db_path,
        max_html_bytes=cfg.store.max_html_bytes,
        preview_chars=cfg.store.preview_chars,
    )


def _open_library(cfg: DocWikiConfig) -> DocumentLibrary:
    library = DocumentLibrary(_open_store(cfg), build_pipeline(cfg.conversion))
    library.refresh()
    return library


def _fail(error: DocWikiError) -> typer.Exit:
    rprint(f"[red]Error:[/red] {error.public_message}")
    return typer.Exit(1)


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to docwiki.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    _configure_logging(_config)


@app.command()
def convert(
    file: str = typer.Argument(..., help="Path to the document to convert"),
    output: str | None = typer.Option(None, "--output", "-o", help="Write HTML to file"),
    fallback: bool = typer.Option(
        False, "--fallback", help="Show unsupported files as plain text instead of failing"
    ),
) -> None:
    """Convert a document to an HTML fragment without storing it."""
    cfg = _get_config()
    pipeline = build_pipeline(cfg.conversion)
    source = Path(file)
    if not source.is_file():
        rprint(f"[red]Error:[/red] File not found: {file}")
        raise typer.Exit(1)

    try:
        result = asyncio.run(pipeline.convert(LocalFile(source), fallback_to_text=fallback))
    except DocWikiError as e:
        raise _fail(e)

    if output:
        Path(output).write_text(result.html, encoding="utf-8")
        rprint(f"[green]Written to[/green] {output}")
    else:
        print(result.html)

    # HTML owns stdout unless --output is given.
    console = Console(stderr=output is None)
    console.print(
        Panel(
            f"[dim]Source:[/dim]  {result.filename}\n"
            f"[dim]Kind:[/dim]    {result.kind.value}\n"
            f"[dim]Size:[/dim]    {format_bytes(result.size_bytes)}\n"
            f"[dim]HTML:[/dim]    {format_bytes(result.html_bytes)}",
            title="Conversion Result",
            border_style="green",
        )
    )


@app.command()
def add(
    files: list[str] = typer.Argument(..., help="Documents to upload (.md, .txt, .pdf, .docx)"),
) -> None:
    """Convert documents and store them, one file at a time."""
    cfg = _get_config()
    try:
        library = _open_library(cfg)
    except DocWikiError as e:
        raise _fail(e)

    def on_event(event: IngestEvent) -> None:
        if event.type == IngestEventType.started:
            rprint(f"Processing {event.filename}...")
        elif event.type == IngestEventType.progress:
            rprint(f"  [dim]{event.filename} (page {event.page}/{event.total})[/dim]")
        elif event.type == IngestEventType.stored:
            rprint(f"[green]✓[/green] {event.filename} stored as #{event.document_id}")
        elif event.type == IngestEventType.failed:
            rprint(f"[red]✗[/red] {event.message}")

    try:
        report = asyncio.run(library.ingest([LocalFile(f) for f in files], on_event=on_event))
    except DocWikiError as e:
        raise _fail(e)

    rprint(
        f"[bold]{len(report.created)}[/bold] stored, "
        f"[bold]{len(report.failures)}[/bold] failed."
    )
    if not report.ok:
        raise typer.Exit(1)


@app.command("list")
def list_docs(
    search: str | None = typer.Option(None, "--search", "-s", help="Filter by title or content"),
) -> None:
    """List stored documents, newest first."""
    cfg = _get_config()
    try:
        library = _open_library(cfg)
    except DocWikiError as e:
        raise _fail(e)

    docs = library.search(search)
    if not docs:
        rprint("[yellow]No documents found.[/yellow]")
        return

    try:
        counts = library.stats()
    except DocWikiError as e:
        raise _fail(e)

    table = Table(title=f"Documents ({len(docs)})")
    table.add_column("ID", justify="right")
    table.add_column("", no_wrap=True)
    table.add_column("Title", style="cyan")
    table.add_column("Updated", style="green")
    for d in docs:
        table.add_row(
            str(d.id),
            _KIND_ICONS.get(d.kind, "📁"),
            d.title,
            format_date(d.updated_at) or format_date(d.created_at),
        )
    rprint(table)
    rprint("[dim]" + ", ".join(f"{kind}: {n}" for kind, n in counts.items()) + "[/dim]")


@app.command()
def show(
    doc_id: int = typer.Argument(..., help="Document id"),
    raw: bool = typer.Option(False, "--raw", help="Print stored HTML without sanitizing"),
) -> None:
    """Print a stored document's HTML, sanitized for display."""
    cfg = _get_config()
    try:
        doc = _open_store(cfg).get(doc_id)
    except DocWikiError as e:
        raise _fail(e)
    print(doc.html if raw else sanitize_html(doc.html))


@app.command()
def update(
    doc_id: int = typer.Argument(..., help="Document id"),
    title: str | None = typer.Option(None, "--title", help="New title"),
    kind: DocumentKind | None = typer.Option(None, "--kind", help="New document kind"),
    html_file: str | None = typer.Option(None, "--html-file", help="Replace HTML from file"),
) -> None:
    """Change a document's title, kind or HTML; other fields are kept."""
    cfg = _get_config()
    html = None
    if html_file:
        source = Path(html_file)
        if not source.is_file():
            rprint(f"[red]Error:[/red] File not found: {html_file}")
            raise typer.Exit(1)
        html = source.read_text(encoding="utf-8")
    try:
        doc = _open_store(cfg).update(doc_id, title=title, kind=kind, html=html)
    except DocWikiError as e:
        raise _fail(e)
    rprint(f"[green]Updated[/green] #{doc.id} {doc.title} ({doc.updated_at})")


@app.command()
def delete(doc_id: int = typer.Argument(..., help="Document id")) -> None:
    """Delete one document."""
    cfg = _get_config()
    try:
        _open_store(cfg).delete(doc_id)
    except DocWikiError as e:
        raise _fail(e)
    rprint(f"[green]Deleted[/green] #{doc_id}")


@app.command()
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
) -> None:
    """Delete ALL documents."""
    cfg = _get_config()
    try:
        library = _open_library(cfg)
    except DocWikiError as e:
        raise _fail(e)
    if not library.documents:
        rprint("[yellow]Nothing to delete.[/yellow]")
        return
    if not yes:
        typer.confirm(f"Delete all {len(library.documents)} documents?", abort=True)
    try:
        removed = library.clear()
    except DocWikiError as e:
        raise _fail(e)
    rprint(f"[green]Deleted {removed} document(s).[/green]")


# -- config subcommands ----------------------------------------------------


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing docwiki.yaml"),
) -> None:
    """Write a commented docwiki.yaml to the current directory."""
    target = Path("docwiki.yaml")
    if target.exists() and not force:
        rprint(f"[yellow]{target} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


@config_app.command("show")
def config_show() -> None:
    """Print the effective configuration."""
    cfg = _get_config()
    rprint(yaml.safe_dump(cfg.model_dump(), default_flow_style=False, sort_keys=False))

"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from sqlmodel import Session

from mdpages.config import Settings, load_config
from mdpages.core.export import write_doc
from mdpages.core.models import DocumentMap
from mdpages.core.pipeline import DocumentPipeline
from mdpages.core.source import FileSystemSource
from mdpages.crud.database import init_db, make_engine, reset_db
from mdpages.crud.pages import save_page
from mdpages.crud.store import DocumentStore, RuntimeMode
from mdpages.errors import MdPagesError


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _store(path: Path, settings: Settings, render_pages: bool = False) -> DocumentStore:
    """Store over path (a directory, or the directory holding a single file) for one CLI run."""
    if not path.exists():
        _fail(f"Path not found: {path}")
    source = FileSystemSource(path if path.is_dir() else path.parent)
    mode = RuntimeMode(development=settings.development, background_task=settings.background_task)
    try:
        pipeline = DocumentPipeline.from_settings(settings)
    except KeyError as e:
        _fail(f"Unknown parser preset: {settings.parser_config}", e)
    return DocumentStore(pipeline, source, mode, render_pages=render_pages)


def _load(store: DocumentStore, path: Path) -> list:
    try:
        return store.load_all() if path.is_dir() else [store.load(path.name)]
    except MdPagesError as e:
        _fail(f"Failed to load {path}", e)


def main_cmd(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    ):
    """Render markdown sources into HTML pages."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s", force=True)


def build_cmd(
    path: Annotated[Optional[str], typer.Argument(help="File or directory to render (default: content_dir)")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    layouts: Annotated[Optional[str], typer.Option("--layout-dir", help="Jinja2 layout directory")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    dev: Annotated[Optional[bool], typer.Option("--dev", help="Include drafts and future-dated documents")] = None,
    db: Annotated[bool, typer.Option("--db", help="Also save rendered pages to the database")] = False,
    ):
    """Render every document under path to <section>/<slug>.html plus a JSON sidecar."""
    settings = _settings(overrides={
        "output_dir": out, "layout_dir": layouts,
        "parser_config": parser, "development": dev,
    })
    root = Path(path) if path else settings.content_dir
    store = _store(root, settings, render_pages=True)
    docs = [doc for doc in _load(store, root) if store.is_visible(doc, settings.development)]

    output_dir = Path(settings.output_dir)
    for doc in docs:
        html_path, _ = write_doc(doc, output_dir)
        typer.echo(f"  {doc.path} -> {html_path}")
    typer.echo(f"Built {len(docs)} document(s) to {output_dir}/")

    if not db:
        return
    engine = make_engine(settings.db_url)
    init_db(engine)
    counts = {"created": 0, "updated": 0, "unchanged": 0}
    try:
        with Session(engine) as session:
            for doc in docs:
                _, status = save_page(session, doc)
                counts[status] += 1
            session.commit()
    except Exception as e:
        _fail("Saving pages failed", e)
    typer.echo(
        f"Saved - "
        f"{counts['created']} created, "
        f"{counts['updated']} updated, "
        f"{counts['unchanged']} unchanged"
    )


def list_cmd(
    path: Annotated[Optional[str], typer.Argument(help="Content directory (default: content_dir)")] = None,
    dev: Annotated[Optional[bool], typer.Option("--dev", help="Include drafts and future-dated documents")] = None,
    ):
    """List top-level directories (sections) and their visible document counts."""
    settings = _settings(overrides={"development": dev})
    root = Path(path) if path else settings.content_dir
    store = _store(root, settings)
    _load(store, root)
    sections = store.sections()
    if not sections:
        typer.echo("No documents found.")
        raise typer.Exit(1)
    for name, count in sections.items():
        typer.echo(f"{name}\t{count}")


def toc_cmd(
    file: Annotated[str, typer.Argument(help="Markdown file")],
    ):
    """Print a document's table of contents (h2/h3 headings) as JSON."""
    settings = _settings()
    root = Path(file)
    if root.is_dir():
        _fail(f"Not a file: {file}")
    store = _store(root, settings)
    doc = _load(store, root)[0]
    toc = doc.document_map or DocumentMap()
    typer.echo(json.dumps(toc.model_dump(mode='json'), indent=2))


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize database schema. Use --reset to clear existing data."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        reset_db(engine)
        typer.echo("Existing data cleared.")
    else:
        init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")

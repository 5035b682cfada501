"""CLI for the travel journal (browse and edit a destination's notebook)."""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from travel_journal.config import DATABASE_FILENAME, resolve_data_directory
from travel_journal.core.editor.session import PageEditorSession
from travel_journal.core.editor.surface import BufferSurface
from travel_journal.core.repository import DocumentRepository
from travel_journal.core.storage.store import SqliteStore
from travel_journal.core.tree.engine import locate
from travel_journal.core.tree.markdown import render_tree_as_markdown
from travel_journal.core.tree.navigation import JournalNavigator, format_breadcrumbs, get_breadcrumbs
from travel_journal.errors import TravelJournalError
from travel_journal.logging_config import configure_logging
from travel_journal.models.node import JournalDocument
from travel_journal.models.operations import (
    AddPage,
    AddSection,
    Delete,
    Indent,
    MoveDown,
    MoveUp,
    Outdent,
    Rename,
    TreeOp,
)

app = typer.Typer(help="Travel journal: a notebook of sections and pages per destination.")

DataDirOption = Annotated[
    Path | None,
    typer.Option("--data-dir", "-d", help="Journal database directory"),
]
DestinationArg = Annotated[str, typer.Argument(help="Destination id")]
NodeArg = Annotated[str, typer.Argument(help="Node id")]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


@contextmanager
def _open_repository(data_dir: Path | None) -> Iterator[DocumentRepository]:
    """Open the journal database, creating the directory if needed."""
    dst = data_dir or resolve_data_directory()
    dst.mkdir(parents=True, exist_ok=True)
    try:
        store = SqliteStore.connect(dst / DATABASE_FILENAME, strict=True)
    except TravelJournalError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e
    try:
        yield DocumentRepository(store)
    except TravelJournalError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e
    finally:
        store.close()


def _echo_tree(doc: JournalDocument) -> None:
    typer.echo(render_tree_as_markdown(doc, show_ids=True), nl=False)


def _require_node(doc: JournalDocument, node_id: str) -> None:
    if locate(doc.tree, node_id) is None:
        typer.echo(f"Node '{node_id}' not found.")
        raise typer.Exit(1)


@app.command()
def journals(data_dir: DataDirOption = None) -> None:
    """List destinations that have a journal."""
    with _open_repository(data_dir) as repo:
        ids = repo.destinations()
        typer.echo(f"{len(ids)} journals:\n")
        for destination_id in ids:
            typer.echo(f"  {destination_id}")


@app.command()
def tree(
    destination: DestinationArg,
    max_depth: Annotated[
        int | None,
        typer.Option("--max-depth", "-m", help="Max depth levels to render"),
    ] = None,
    data_dir: DataDirOption = None,
) -> None:
    """Show the journal outline (created on first access)."""
    with _open_repository(data_dir) as repo:
        doc = repo.open(destination)
        typer.echo(render_tree_as_markdown(doc, max_depth=max_depth, show_ids=True), nl=False)


def _run_op(destination: str, op: TreeOp, data_dir: Path | None) -> None:
    with _open_repository(data_dir) as repo:
        node_id = getattr(op, "node_id", None)
        if node_id is not None:
            _require_node(repo.open(destination), node_id)
        _echo_tree(repo.apply_tree_op(destination, op))


@app.command(name="add-page")
def add_page(
    destination: DestinationArg,
    title: Annotated[str | None, typer.Option("--title", "-t", help="Page title")] = None,
    data_dir: DataDirOption = None,
) -> None:
    """Add a page after the selected node."""
    _run_op(destination, AddPage(title=title), data_dir)


@app.command(name="add-section")
def add_section(
    destination: DestinationArg,
    title: Annotated[str | None, typer.Option("--title", "-t", help="Section title")] = None,
    data_dir: DataDirOption = None,
) -> None:
    """Add a section after the selected node."""
    _run_op(destination, AddSection(title=title), data_dir)


@app.command()
def rename(
    destination: DestinationArg,
    node_id: NodeArg,
    title: Annotated[str, typer.Argument(help="New title")],
    data_dir: DataDirOption = None,
) -> None:
    """Rename a page or section."""
    if not title.strip():
        typer.echo("Title must not be empty.")
        raise typer.Exit(1)
    _run_op(destination, Rename(node_id=node_id, title=title), data_dir)


@app.command()
def delete(
    destination: DestinationArg,
    node_id: NodeArg,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
    data_dir: DataDirOption = None,
) -> None:
    """Delete a node and everything below it."""
    if not yes:
        typer.confirm(f"Delete '{node_id}'?", abort=True)
    _run_op(destination, Delete(node_id=node_id), data_dir)


@app.command()
def up(destination: DestinationArg, node_id: NodeArg, data_dir: DataDirOption = None) -> None:
    """Move a node before its previous sibling."""
    _run_op(destination, MoveUp(node_id=node_id), data_dir)


@app.command()
def down(destination: DestinationArg, node_id: NodeArg, data_dir: DataDirOption = None) -> None:
    """Move a node after its next sibling."""
    _run_op(destination, MoveDown(node_id=node_id), data_dir)


@app.command()
def indent(destination: DestinationArg, node_id: NodeArg, data_dir: DataDirOption = None) -> None:
    """Move a node into the section just above it."""
    _run_op(destination, Indent(node_id=node_id), data_dir)


@app.command()
def outdent(destination: DestinationArg, node_id: NodeArg, data_dir: DataDirOption = None) -> None:
    """Move a node out of its section, right after it."""
    _run_op(destination, Outdent(node_id=node_id), data_dir)


@app.command()
def select(destination: DestinationArg, node_id: NodeArg, data_dir: DataDirOption = None) -> None:
    """Make a node the current selection."""
    with _open_repository(data_dir) as repo:
        _require_node(repo.open(destination), node_id)
        _echo_tree(repo.select(destination, node_id))


@app.command()
def read(destination: DestinationArg, node_id: NodeArg, data_dir: DataDirOption = None) -> None:
    """Print a page's breadcrumb and text."""
    with _open_repository(data_dir) as repo:
        doc = repo.open(destination)
        _require_node(doc, node_id)
        typer.echo(format_breadcrumbs(get_breadcrumbs(doc.tree, node_id)))
        content = doc.pages.get(node_id)
        if content is None:
            typer.echo("(section)")
            return
        typer.echo()
        typer.echo(content.formatted_text)


@app.command()
def write(
    destination: DestinationArg,
    node_id: NodeArg,
    text: Annotated[str, typer.Argument(help="New page content")],
    data_dir: DataDirOption = None,
) -> None:
    """Replace a page's text. The selection is left where it was."""
    with _open_repository(data_dir) as repo:
        session = PageEditorSession(repo, BufferSurface())
        navigator = JournalNavigator(repo, session, destination)
        _require_node(navigator.open(), node_id)
        session.load(destination, node_id)
        if session.active_page_id is None:
            typer.echo(f"Node '{node_id}' is a section, not a page.")
            raise typer.Exit(1)
        session.on_content_changed(text)
        navigator.close()
        typer.echo(f"Saved page {node_id}")


@app.command()
def drop(
    destination: DestinationArg,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
    data_dir: DataDirOption = None,
) -> None:
    """Delete a destination's whole journal."""
    if not yes:
        typer.confirm(f"Delete the journal of '{destination}'?", abort=True)
    with _open_repository(data_dir) as repo:
        if not repo.exists(destination):
            typer.echo(f"No journal for '{destination}'.")
            raise typer.Exit(1)
        repo.delete_destination_journal(destination)
    typer.echo(f"Deleted journal of {destination}")

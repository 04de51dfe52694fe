"""Link commands: browse groups, toggle selections and export them."""

import json
from pathlib import Path
from typing import Optional

import typer

from backend.db import SelectionWriteError, open_selection_store
from backend.links import (
    build_groups,
    count_links,
    count_selected,
    filter_groups,
    selected_links,
)
from backend.links.session import LinkSession
from backend.source import SourceUnavailableError, load_document

from cli.rendering import render_groups

links_app = typer.Typer(help="Browse link groups and manage the selection.")


def _load_markdown() -> str:
    try:
        return load_document()
    except SourceUnavailableError as e:
        typer.echo(f"❌ Error: {e}")
        raise typer.Exit(code=1)


@links_app.command("list")
def links_list(
    search: str = typer.Option("", "--search", "-s", help="Filter by name or url."),
    selected_only: bool = typer.Option(False, "--selected-only", help="Show only selected links."),
) -> None:
    """List link groups with their selection state."""
    markdown = _load_markdown()
    store = open_selection_store()
    try:
        groups = build_groups(markdown, store.get_all())
    finally:
        store.close()

    shown = filter_groups(groups, search, selected_only)
    if not shown:
        typer.echo("No links found.")
        return

    typer.echo(render_groups(shown))
    typer.echo("")
    typer.echo(
        f"{count_selected(groups)} selected of {count_links(groups)} links "
        f"in {len(groups)} groups."
    )


@links_app.command("toggle")
def links_toggle(
    url: str = typer.Argument(..., help="URL to select or deselect."),
) -> None:
    """Select or deselect every link pointing at URL."""
    markdown = _load_markdown()
    store = open_selection_store()
    try:
        session = LinkSession.open(markdown, store)
        urls = session.toggle(url)
    except SelectionWriteError as e:
        typer.echo(f"❌ Error: {e}")
        raise typer.Exit(code=1)
    finally:
        store.close()

    state = "Selected" if session.is_selected(url) else "Deselected"
    typer.echo(f"✅ {state} {url} ({len(urls)} selected)")


@links_app.command("clear")
def links_clear() -> None:
    """Deselect everything."""
    store = open_selection_store()
    try:
        store.replace_all([])
    except SelectionWriteError as e:
        typer.echo(f"❌ Error: {e}")
        raise typer.Exit(code=1)
    finally:
        store.close()
    typer.echo("✅ Selection cleared.")


@links_app.command("export")
def links_export(
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to a file instead of stdout."),
) -> None:
    """Export the selected links as a JSON list of {name, url}."""
    markdown = _load_markdown()
    store = open_selection_store()
    try:
        groups = build_groups(markdown, store.get_all())
    finally:
        store.close()

    links = selected_links(groups)
    if not links:
        typer.echo("❌ Select at least one link before exporting.")
        raise typer.Exit(code=1)

    data = json.dumps([{"name": l.name, "url": l.url} for l in links], indent=2, ensure_ascii=False)
    if output is None:
        typer.echo(data)
        return
    output.write_text(data, encoding="utf-8")
    typer.echo(f"✅ Exported {len(links)} links to {output}")

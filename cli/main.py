"""RuleLinks CLI — entry-point for all backend operations.

Usage:
    python cli/main.py --help

Command groups:
    links     → browse groups, toggle selections, export
    source    → refresh the cached source document
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from backend.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import Optional

import typer

from backend.config import settings
from backend.logging_config import configure_logging
from cli.commands.links import links_app

app = typer.Typer(
    name="rulelinks",
    help="RuleLinks CLI.",
    no_args_is_help=True,
)
app.add_typer(links_app, name="links")


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override LOG_LEVEL."),
) -> None:
    configure_logging(log_level)


# ---------------------------------------------------------------------------
# Source commands
# ---------------------------------------------------------------------------
source_app = typer.Typer(help="Source document operations.", no_args_is_help=True)
app.add_typer(source_app, name="source")


@source_app.command("fetch")
def source_fetch(
    url: Optional[str] = typer.Option(None, help="Document URL (defaults to SOURCE_URL)."),
) -> None:
    """Fetch the source document, refresh the cache and summarise its groups."""
    from backend.links import build_groups, count_links
    from backend.source import SourceUnavailableError, load_document

    target = url or settings.source_url
    typer.echo(f"[source fetch] Fetching {target!r} …")
    try:
        markdown = load_document(url=target, force=True)
    except SourceUnavailableError as e:
        typer.echo(f"❌ Error: {e}")
        raise typer.Exit(code=1)

    groups = build_groups(markdown)
    typer.echo(f"[source fetch] Groups : {len(groups)}")
    typer.echo(f"[source fetch] Links  : {count_links(groups)}")
    typer.echo(f"[source fetch] Cached : {settings.cache_path}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()

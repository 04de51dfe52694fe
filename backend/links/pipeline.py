"""Read path: raw Markdown → parsed, deduplicated, selection-annotated groups."""

from __future__ import annotations

from typing import Iterable, List

from backend.links.dedupe import dedupe_groups
from backend.links.models import LinkGroup
from backend.links.parser import parse_markdown_tables
from backend.links.selection import apply_selection


def build_groups(markdown: str, selected: Iterable[str] = ()) -> List[LinkGroup]:
    """Parse *markdown*, dedupe each group and mark the urls in *selected*."""
    return apply_selection(dedupe_groups(parse_markdown_tables(markdown)), selected)

"""Link-group parsing and selection reconciliation."""

from backend.links.dedupe import dedupe_groups, dedupe_links
from backend.links.extractor import extract_links
from backend.links.filtering import count_links, count_selected, filter_groups
from backend.links.models import Link, LinkGroup
from backend.links.parser import parse_markdown_tables
from backend.links.pipeline import build_groups
from backend.links.selection import (
    apply_selection,
    collect_selected,
    sanitize_urls,
    selected_links,
    toggle_link,
)

__all__ = [
    "Link",
    "LinkGroup",
    "extract_links",
    "parse_markdown_tables",
    "dedupe_links",
    "dedupe_groups",
    "apply_selection",
    "toggle_link",
    "collect_selected",
    "selected_links",
    "sanitize_urls",
    "build_groups",
    "filter_groups",
    "count_links",
    "count_selected",
]

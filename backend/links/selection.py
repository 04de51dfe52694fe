"""Reconciliation between parsed link groups and the persisted selection set.

The selection set is a flat collection of URLs and is the only source of
truth for ``Link.selected``.  Every function here returns fresh objects and
leaves its inputs untouched, so callers can keep the previous snapshot around
for rollback.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Iterable, List

from backend.links.models import Link, LinkGroup


def apply_selection(groups: Iterable[LinkGroup], selected: Iterable[str]) -> List[LinkGroup]:
    """Return *groups* with ``selected`` set on every link whose url is in *selected*."""
    urls = set(selected)
    return [
        LinkGroup(
            name=group.name,
            links=[replace(link, selected=link.url in urls) for link in group.links],
        )
        for group in groups
    ]


def toggle_link(groups: Iterable[LinkGroup], url: str) -> List[LinkGroup]:
    """Return *groups* with the ``selected`` flag of every link at *url* inverted.

    Selection is keyed by url alone, so links that share a url under
    different names flip together.  Unknown urls leave the groups unchanged.
    """
    return [
        LinkGroup(
            name=group.name,
            links=[
                replace(link, selected=not link.selected) if link.url == url else replace(link)
                for link in group.links
            ],
        )
        for group in groups
    ]


def collect_selected(groups: Iterable[LinkGroup]) -> List[str]:
    """Return the unique selected urls across *groups* in first-seen order.

    This is the full replacement payload written to the selection store.
    """
    urls: List[str] = []
    seen: set[str] = set()
    for group in groups:
        for link in group.links:
            if link.selected and link.url not in seen:
                seen.add(link.url)
                urls.append(link.url)
    return urls


def selected_links(groups: Iterable[LinkGroup]) -> List[Link]:
    """Return the selected ``(name, url)`` pairs in document order, each once."""
    result: List[Link] = []
    seen: set[tuple[str, str]] = set()
    for group in groups:
        for link in group.links:
            key = (link.name, link.url)
            if link.selected and key not in seen:
                seen.add(key)
                result.append(replace(link))
    return result


def sanitize_urls(payload: Iterable[Any]) -> List[str]:
    """Keep only the string entries of *payload*, without duplicates."""
    return list(dict.fromkeys(item for item in payload if isinstance(item, str)))

"""Search and "selected only" views over link groups."""

from __future__ import annotations

from typing import Iterable, List

from backend.links.models import LinkGroup


def filter_groups(
    groups: Iterable[LinkGroup],
    query: str = "",
    selected_only: bool = False,
) -> List[LinkGroup]:
    """Return the links matching *query* and/or the selection filter.

    *query* is a case-insensitive substring tested against both the link name
    and its url.  Groups left without links are dropped.
    """
    needle = query.strip().lower()
    result: List[LinkGroup] = []
    for group in groups:
        links = [
            link
            for link in group.links
            if (not selected_only or link.selected)
            and (not needle or needle in link.name.lower() or needle in link.url.lower())
        ]
        if links:
            result.append(LinkGroup(name=group.name, links=links))
    return result


def count_links(groups: Iterable[LinkGroup]) -> int:
    return sum(len(g.links) for g in groups)


def count_selected(groups: Iterable[LinkGroup]) -> int:
    return sum(1 for g in groups for link in g.links if link.selected)

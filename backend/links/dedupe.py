"""Per-group link deduplication."""

from __future__ import annotations

from typing import Iterable, List

from backend.links.models import Link, LinkGroup


def dedupe_links(links: Iterable[Link]) -> List[Link]:
    """Return *links* with repeated ``(name, url)`` pairs removed.

    The first occurrence of each pair is kept and the original order is
    preserved.
    """
    seen: set[tuple[str, str]] = set()
    result: List[Link] = []
    for link in links:
        key = (link.name, link.url)
        if key not in seen:
            seen.add(key)
            result.append(link)
    return result


def dedupe_groups(groups: Iterable[LinkGroup]) -> List[LinkGroup]:
    return [LinkGroup(name=g.name, links=dedupe_links(g.links)) for g in groups]

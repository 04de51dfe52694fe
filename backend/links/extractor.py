"""Link extraction from a single table cell."""

from __future__ import annotations

import re
from typing import List

from backend.links.models import Link

# [label](target) with no ``]`` inside the label and no ``)`` inside the target
_LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")


def extract_links(cell: str) -> List[Link]:
    """Return every ``[name](url)`` pair in *cell*, left to right.

    Both parts are stripped.  Matches whose name or url is empty after
    stripping are skipped, as is any malformed markup that fails to match.
    """
    links: List[Link] = []
    for match in _LINK_PATTERN.finditer(cell):
        name = match.group(1).strip()
        url = match.group(2).strip()
        if name and url:
            links.append(Link(name=name, url=url))
    return links

"""Data models for parsed link groups."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List


@dataclass
class Link:
    """A named hyperlink taken from one table cell.

    ``selected`` is a projection of the persisted selection set and is never
    stored on its own.
    """

    name: str
    url: str
    selected: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "url": self.url, "selected": self.selected}


@dataclass
class LinkGroup:
    """All links found in one Markdown table, named after its first header cell."""

    name: str
    links: List[Link] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "links": [link.to_dict() for link in self.links]}

"""Utilities for rendering link groups in the CLI."""

from __future__ import annotations

from typing import List

from backend.links.models import LinkGroup


def render_groups(groups: List[LinkGroup]) -> str:
    """Render groups as an indented checklist.

    Example::

        📁 Apple (1/2)
          [x] Apple  https://example.com/Apple.yaml
          [ ] AppleMusic  https://example.com/AppleMusic.yaml
    """
    lines: List[str] = []
    for group in groups:
        selected = sum(1 for link in group.links if link.selected)
        lines.append(f"📁 {group.name} ({selected}/{len(group.links)})")
        for link in group.links:
            mark = "x" if link.selected else " "
            lines.append(f"  [{mark}] {link.name}  {link.url}")
    return "\n".join(lines)

"""Markdown table scanner that turns pipe tables into :class:`LinkGroup` lists.

The scanner is a single forward pass with no lookahead.  Each stripped line is
classified as one of :class:`LineKind` and fed through ``_TRANSITIONS``,
which yields the next :class:`TableState` and the action to run:

=====================  =========  =====  =========  ==================
state / line kind      BLANK      PROSE  SEPARATOR  ROW
=====================  =========  =====  =========  ==================
OUTSIDE                OUTSIDE    -      IN_BODY    header
AWAITING_SEPARATOR     -          -      IN_BODY    header
IN_BODY                OUTSIDE    -      IN_BODY    data
=====================  =========  =====  =========  ==================

(``-`` keeps the current state.)  A header row starts a new group named after
its first cell; data rows feed every cell through :func:`extract_links`.
A blank line only ends the table body; the group stays open until the next
header row or the end of input, and is emitted only if it holds a link.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import List, Optional

from backend.links.extractor import extract_links
from backend.links.models import LinkGroup

_SEPARATOR_CELL = re.compile(r"^[-:\s]+$")


class TableState(Enum):
    OUTSIDE = "outside"
    AWAITING_SEPARATOR = "awaiting_separator"
    IN_BODY = "in_body"


class LineKind(Enum):
    BLANK = "blank"
    PROSE = "prose"
    SEPARATOR = "separator"
    ROW = "row"


class _Action(Enum):
    NONE = "none"
    HEADER = "header"
    DATA = "data"


_TRANSITIONS: dict[tuple[TableState, LineKind], tuple[TableState, _Action]] = {
    (TableState.OUTSIDE, LineKind.BLANK): (TableState.OUTSIDE, _Action.NONE),
    (TableState.OUTSIDE, LineKind.PROSE): (TableState.OUTSIDE, _Action.NONE),
    (TableState.OUTSIDE, LineKind.SEPARATOR): (TableState.IN_BODY, _Action.NONE),
    (TableState.OUTSIDE, LineKind.ROW): (TableState.AWAITING_SEPARATOR, _Action.HEADER),
    (TableState.AWAITING_SEPARATOR, LineKind.BLANK): (TableState.AWAITING_SEPARATOR, _Action.NONE),
    (TableState.AWAITING_SEPARATOR, LineKind.PROSE): (TableState.AWAITING_SEPARATOR, _Action.NONE),
    (TableState.AWAITING_SEPARATOR, LineKind.SEPARATOR): (TableState.IN_BODY, _Action.NONE),
    (TableState.AWAITING_SEPARATOR, LineKind.ROW): (TableState.AWAITING_SEPARATOR, _Action.HEADER),
    (TableState.IN_BODY, LineKind.BLANK): (TableState.OUTSIDE, _Action.NONE),
    (TableState.IN_BODY, LineKind.PROSE): (TableState.IN_BODY, _Action.NONE),
    (TableState.IN_BODY, LineKind.SEPARATOR): (TableState.IN_BODY, _Action.NONE),
    (TableState.IN_BODY, LineKind.ROW): (TableState.IN_BODY, _Action.DATA),
}


# ---------------------------------------------------------------------------
# Line classification
# ---------------------------------------------------------------------------

def split_row(line: str) -> Optional[List[str]]:
    """Return the stripped cells of a pipe row, or ``None`` if *line* is not one.

    A row starts and ends with ``|`` after stripping; the empty pieces
    outside the outer pipes are dropped.
    """
    stripped = line.strip()
    if not (stripped.startswith("|") and stripped.endswith("|")):
        return None
    return [cell.strip() for cell in stripped.split("|")[1:-1]]


def is_separator(cells: List[str]) -> bool:
    """``True`` when every cell is made only of hyphens, colons and spaces."""
    return all(_SEPARATOR_CELL.match(cell) for cell in cells)


def classify_line(line: str) -> tuple[LineKind, List[str]]:
    """Classify *line* and return its kind together with its cells (if any)."""
    cells = split_row(line)
    if cells is None:
        kind = LineKind.BLANK if not line.strip() else LineKind.PROSE
        return kind, []
    if is_separator(cells):
        return LineKind.SEPARATOR, cells
    return LineKind.ROW, cells


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_markdown_tables(markdown: str) -> List[LinkGroup]:
    """Scan *markdown* and return one :class:`LinkGroup` per link-bearing table.

    Never raises on irregular markup: ragged rows, stray prose, unmatched
    brackets and unnamed tables are skipped.  A header row whose first cell is
    empty leaves no open group, so the links in that table are dropped.
    """
    groups: List[LinkGroup] = []
    current: Optional[LinkGroup] = None
    state = TableState.OUTSIDE

    for line in markdown.split("\n"):
        kind, cells = classify_line(line)
        state, action = _TRANSITIONS[(state, kind)]

        if action is _Action.HEADER:
            if current is not None and current.links:
                groups.append(current)
            current = LinkGroup(name=cells[0]) if cells and cells[0] else None
        elif action is _Action.DATA and current is not None:
            for cell in cells:
                current.links.extend(extract_links(cell))

    if current is not None and current.links:
        groups.append(current)

    return groups

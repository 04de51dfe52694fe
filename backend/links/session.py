"""Interactive selection session with optimistic toggles.

A :class:`LinkSession` owns one in-memory snapshot of the groups.  A toggle
is applied to that snapshot first, then the complete selection set derived
from it is written to the store.  If the write fails the snapshot is restored
and the error is re-raised for the caller to report.

The store is always replaced wholesale, so concurrent sessions race at
whole-set granularity: the last write to land wins.
"""

from __future__ import annotations

import logging
from typing import List

from backend.db.selection import SelectionStore
from backend.links.models import LinkGroup
from backend.links.pipeline import build_groups
from backend.links.selection import collect_selected, toggle_link

logger = logging.getLogger(__name__)


class LinkSession:
    def __init__(self, groups: List[LinkGroup], store: SelectionStore) -> None:
        self.groups = groups
        self._store = store

    @classmethod
    def open(cls, markdown: str, store: SelectionStore) -> "LinkSession":
        """Build a session from freshly loaded *markdown* and the stored selection."""
        return cls(build_groups(markdown, store.get_all()), store)

    def is_selected(self, url: str) -> bool:
        return any(link.url == url and link.selected for g in self.groups for link in g.links)

    def toggle(self, url: str) -> List[str]:
        """Flip *url*, persist the resulting set and return it.

        Raises:
            SelectionWriteError: The store rejected the write.  The session's
                groups are back to their pre-toggle state, as they are for any
                other exception raised by the store.
        """
        previous = self.groups
        self.groups = toggle_link(previous, url)
        urls = collect_selected(self.groups)
        try:
            self._store.replace_all(urls)
        except BaseException:
            logger.warning("Selection write failed, rolling back toggle of %s", url)
            self.groups = previous
            raise
        logger.info("Toggled %s (%d selected)", url, len(urls))
        return urls

"""Persistence backends for the selected-url set.

Every backend implements the same two operations over a flat collection of
strings: ``get_all`` and ``replace_all``.  There are no incremental updates;
each write stores the complete set, so concurrent writers can lose each
other's changes (last writer wins) but never leave a partial set behind.

Backends
--------
memory   In-process set, for tests and throwaway runs.
json     A JSON array on disk (``settings.selection_path``).
sqlite   One row of the ``kv_store`` table (``settings.db_path``).
"""

from __future__ import annotations

import json
import logging
import os
import sqlite3
import tempfile
from pathlib import Path
from typing import Any, Iterable, Optional, Protocol

from backend.config import settings
from backend.db.connection import get_connection
from backend.db.kv import get_value, set_value
from backend.db.migrations import init_db

logger = logging.getLogger(__name__)

SELECTION_KEY = "selected_links"


class SelectionWriteError(RuntimeError):
    """The selection set could not be persisted.  Callers should roll back."""


class SelectionStore(Protocol):
    def get_all(self) -> set[str]: ...

    def replace_all(self, urls: Iterable[str]) -> None: ...

    def close(self) -> None: ...


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _decode(raw: str) -> set[str]:
    """Decode a stored payload into a url set.

    Accepts a bare JSON array or an object with a ``selected`` array.
    Non-string entries are dropped; anything else decodes to an empty set.
    """
    try:
        parsed: Any = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Stored selection is not valid JSON; treating it as empty")
        return set()

    if isinstance(parsed, dict):
        parsed = parsed.get("selected")
    if not isinstance(parsed, list):
        return set()
    return {item for item in parsed if isinstance(item, str)}


def _encode(urls: Iterable[str]) -> str:
    return json.dumps(list(urls), indent=2)


# ---------------------------------------------------------------------------
# Backends
# ---------------------------------------------------------------------------

class MemorySelectionStore:
    def __init__(self, urls: Iterable[str] = ()) -> None:
        self._urls = set(urls)

    def get_all(self) -> set[str]:
        return set(self._urls)

    def replace_all(self, urls: Iterable[str]) -> None:
        self._urls = set(urls)

    def close(self) -> None:
        pass


class JsonFileSelectionStore:
    """Selection set kept as a pretty-printed JSON array in *path*."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = path or settings.selection_path

    def get_all(self) -> set[str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return set()
        except OSError as exc:
            logger.warning("Could not read selection file %s: %s", self.path, exc)
            return set()
        return _decode(raw)

    def replace_all(self, urls: Iterable[str]) -> None:
        """Write the whole set to a sibling temp file and swap it into place.

        Readers see either the previous file or the new one, never a
        partially written array.
        """
        payload = _encode(urls)
        tmp_path: Optional[Path] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write(payload)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise SelectionWriteError(f"Failed to write {self.path}: {exc}") from exc

    def close(self) -> None:
        pass


class SqliteSelectionStore:
    """Selection set kept as a JSON array under one ``kv_store`` key."""

    def __init__(self, conn: sqlite3.Connection, key: str = SELECTION_KEY) -> None:
        self.conn = conn
        self.key = key

    @classmethod
    def open(cls, db_path: Optional[Path] = None) -> "SqliteSelectionStore":
        conn = get_connection(db_path)
        init_db(conn)
        return cls(conn)

    def get_all(self) -> set[str]:
        raw = get_value(self.conn, self.key)
        return _decode(raw) if raw is not None else set()

    def replace_all(self, urls: Iterable[str]) -> None:
        try:
            set_value(self.conn, self.key, _encode(urls))
        except sqlite3.Error as exc:
            raise SelectionWriteError(f"Failed to save selection: {exc}") from exc

    def close(self) -> None:
        self.conn.close()


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

def open_selection_store(backend: Optional[str] = None) -> SelectionStore:
    """Return the store named by *backend* (defaults to ``settings.selection_backend``).

    Raises:
        ValueError: For an unknown backend name.
    """
    name = (backend or settings.selection_backend).lower()
    if name == "sqlite":
        return SqliteSelectionStore.open()
    if name == "json":
        return JsonFileSelectionStore()
    if name == "memory":
        return MemorySelectionStore()
    raise ValueError(f"Unknown selection backend {name!r}. Use: sqlite | json | memory")

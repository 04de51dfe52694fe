"""Database / persistence layer package.

Public re-exports so callers can write::

    from backend.db import get_connection, init_db
    from backend.db import open_selection_store
"""

from backend.db.connection import get_connection
from backend.db.migrations import init_db
from backend.db.selection import (
    JsonFileSelectionStore,
    MemorySelectionStore,
    SelectionStore,
    SelectionWriteError,
    SqliteSelectionStore,
    open_selection_store,
)

__all__ = [
    "get_connection",
    "init_db",
    "SelectionStore",
    "SelectionWriteError",
    "MemorySelectionStore",
    "JsonFileSelectionStore",
    "SqliteSelectionStore",
    "open_selection_store",
]

"""Source document retrieval with a revalidation window and a fallback cache.

``load_document`` resolves the text to parse in this order:

1. The on-disk cache, if it was written less than ``revalidate_seconds`` ago.
2. A fresh fetch, which also rewrites the cache.
3. The on-disk cache of any age, when the fetch fails.

If none of these yields text, :class:`SourceUnavailableError` is raised.
An empty result is never returned in place of a failure.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional

import httpx

from backend.config import settings
from backend.source.fetcher import fetch_document

logger = logging.getLogger(__name__)


class SourceUnavailableError(RuntimeError):
    """Neither the remote document nor a cached copy is available."""


# ---------------------------------------------------------------------------
# Cache helpers
# ---------------------------------------------------------------------------

def read_cache(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8")
    except OSError:
        return None


def write_cache(path: Path, text: str) -> None:
    """Best-effort cache write; failures are logged and otherwise ignored."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        logger.error("Failed to write cache file %s: %s", path, exc)


def cache_age(path: Path) -> Optional[float]:
    """Seconds since *path* was last written, or ``None`` if it does not exist."""
    try:
        return time.time() - path.stat().st_mtime
    except OSError:
        return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def load_document(
    url: Optional[str] = None,
    cache_path: Optional[Path] = None,
    revalidate_seconds: Optional[float] = None,
    force: bool = False,
) -> str:
    """Return the Markdown text of the source document.

    Args:
        url: Document URL.  Defaults to ``settings.source_url``.
        cache_path: Cache file.  Defaults to ``settings.cache_path``.
        revalidate_seconds: How long a cached copy is served without a
            network call.  ``0`` always fetches.
        force: Skip the revalidation window and fetch.

    Raises:
        SourceUnavailableError: The fetch failed and no cached copy exists.
    """
    url = url or settings.source_url
    cache_path = cache_path or settings.cache_path
    window = settings.revalidate_seconds if revalidate_seconds is None else revalidate_seconds

    if not force and window > 0:
        age = cache_age(cache_path)
        if age is not None and age < window:
            cached = read_cache(cache_path)
            if cached:
                logger.debug("Serving cached document (%.0fs old)", age)
                return cached

    try:
        raw = fetch_document(url)
    except httpx.HTTPError as exc:
        logger.warning("Failed to fetch %s: %s", url, exc)
    else:
        if raw.text:
            write_cache(cache_path, raw.text)
            return raw.text
        logger.warning("Fetched %s but the body was empty", url)

    cached = read_cache(cache_path)
    if cached:
        logger.info("Falling back to cached document at %s", cache_path)
        return cached

    raise SourceUnavailableError(
        f"Could not fetch {url} and no cached copy is available."
    )

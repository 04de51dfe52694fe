"""Source package — remote document fetch & fallback cache."""

from backend.source.fetcher import fetch_document
from backend.source.loader import SourceUnavailableError, load_document
from backend.source.models import RawDocument

__all__ = ["fetch_document", "load_document", "RawDocument", "SourceUnavailableError"]

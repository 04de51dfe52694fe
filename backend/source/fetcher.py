"""HTTP fetcher for the remote Markdown document."""

from __future__ import annotations

import httpx

from backend.config import settings
from backend.source.models import RawDocument

_DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; RuleLinks-Bot/1.0)",
    "Accept": "text/markdown, text/plain;q=0.9, */*;q=0.1",
}


def fetch_document(url: str) -> RawDocument:
    """Fetch *url* and return a :class:`RawDocument`.

    Raises:
        httpx.HTTPStatusError: If the server returns a 4xx/5xx status code.
        httpx.HTTPError: On connection failures and timeouts.
    """
    with httpx.Client(
        headers=_DEFAULT_HEADERS,
        timeout=settings.request_timeout,
        follow_redirects=True,
    ) as client:
        response = client.get(url)
        response.raise_for_status()
        return RawDocument(url=url, text=response.text, status_code=response.status_code)

"""Data models for the source-document fetcher."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RawDocument:
    """The raw HTTP response for one fetch of the source document."""

    url: str
    text: str
    status_code: int

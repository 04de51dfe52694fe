"""Link-group and selection endpoints.

Routes
------
GET  /links              Parsed groups with selection flags (?q=, ?selected_only=)
GET  /links/selection    The persisted selection set
POST /links/selection    Replace the whole selection set
POST /links/toggle       Flip one url and persist the resulting set
GET  /links/export       Selected (name, url) pairs for the export step
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field

from backend.db.selection import SelectionWriteError
from backend.links import build_groups, filter_groups, sanitize_urls, selected_links
from backend.links.session import LinkSession
from backend.source import SourceUnavailableError, load_document

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Pydantic schemas
# ---------------------------------------------------------------------------

class LinkOut(BaseModel):
    name: str
    url: str
    selected: bool


class GroupOut(BaseModel):
    name: str
    links: List[LinkOut]


class SelectionWrite(BaseModel):
    """Accepts the url list under ``urls``, ``selectedUrls`` or ``selected``."""

    model_config = ConfigDict(populate_by_name=True)

    urls: Optional[List[Any]] = None
    selected_urls: Optional[List[Any]] = Field(default=None, alias="selectedUrls")
    selected: Optional[List[Any]] = None

    def payload(self) -> Optional[List[Any]]:
        for value in (self.urls, self.selected_urls, self.selected):
            if value is not None:
                return value
        return None


class ToggleRequest(BaseModel):
    url: str


class SelectionOut(BaseModel):
    urls: List[str]


class SelectionWriteOut(BaseModel):
    ok: bool
    count: int


class ToggleOut(BaseModel):
    url: str
    selected: bool
    count: int


class ExportLinkOut(BaseModel):
    name: str
    url: str


class ExportOut(BaseModel):
    links: List[ExportLinkOut]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _load_markdown() -> str:
    try:
        return load_document()
    except SourceUnavailableError as exc:
        logger.error("Source document unavailable: %s", exc)
        raise HTTPException(status_code=503, detail=str(exc)) from exc


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("", response_model=List[GroupOut])
def list_groups_endpoint(
    request: Request,
    q: str = "",
    selected_only: bool = False,
) -> List[dict[str, Any]]:
    """Return every link group of the source document with ``selected`` flags."""
    store = request.app.state.store
    groups = build_groups(_load_markdown(), store.get_all())
    return [g.to_dict() for g in filter_groups(groups, q, selected_only)]


@router.get("/selection", response_model=SelectionOut)
def get_selection_endpoint(request: Request) -> dict[str, Any]:
    """Return the persisted selection set."""
    return {"urls": sorted(request.app.state.store.get_all())}


@router.post("/selection", response_model=SelectionWriteOut)
def replace_selection_endpoint(body: SelectionWrite, request: Request) -> dict[str, Any]:
    """Replace the whole selection set.  Non-string entries are dropped."""
    items = body.payload()
    if items is None:
        raise HTTPException(
            status_code=400,
            detail="Request body must contain a 'urls' array.",
        )
    urls = sanitize_urls(items)
    try:
        request.app.state.store.replace_all(urls)
    except SelectionWriteError as exc:
        logger.error("Error saving selected links: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to save selected links.") from exc
    return {"ok": True, "count": len(urls)}


@router.post("/toggle", response_model=ToggleOut)
def toggle_endpoint(body: ToggleRequest, request: Request) -> dict[str, Any]:
    """Flip the selection state of every link at ``url`` and persist the full set."""
    session = LinkSession.open(_load_markdown(), request.app.state.store)
    try:
        urls = session.toggle(body.url)
    except SelectionWriteError as exc:
        raise HTTPException(status_code=500, detail="Failed to save selected links.") from exc
    return {"url": body.url, "selected": session.is_selected(body.url), "count": len(urls)}


@router.get("/export", response_model=ExportOut)
def export_endpoint(request: Request) -> dict[str, Any]:
    """Return the selected ``{name, url}`` pairs in document order."""
    groups = build_groups(_load_markdown(), request.app.state.store.get_all())
    links = selected_links(groups)
    if not links:
        raise HTTPException(status_code=400, detail="Select at least one link before exporting.")
    return {"links": [{"name": link.name, "url": link.url} for link in links]}

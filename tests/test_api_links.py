"""Tests for the /links API endpoints.

All tests use the FastAPI TestClient with an in-memory selection store and a
patched ``load_document``.  No network or disk access beyond ``tmp_path``.
"""

from __future__ import annotations

from typing import Iterable

import pytest
from fastapi.testclient import TestClient

from backend.api.app import create_app
from backend.db.selection import MemorySelectionStore, SelectionWriteError
from backend.source import SourceUnavailableError


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

_MARKDOWN = (
    "# Rules\n\n"
    "| A |\n|---|\n| [x](http://a) |\n\n"
    "| B |\n|---|\n| [y](http://b) [z](http://c) | [y](http://b) |\n"
)


class FailingStore(MemorySelectionStore):
    def replace_all(self, urls: Iterable[str]) -> None:
        raise SelectionWriteError("disk full")


@pytest.fixture()
def client(tmp_path, monkeypatch):
    """Return a TestClient backed by an isolated in-memory selection store.

    The lifespan opens its own store in the (temporary) workspace when the
    context manager enters.  We replace it with a ``MemorySelectionStore`` so
    each test starts from an empty selection.
    """
    monkeypatch.setattr("backend.config.settings.workspace_dir", tmp_path)
    monkeypatch.setattr("backend.api.routers.links.load_document", lambda: _MARKDOWN)
    app = create_app()

    with TestClient(app, raise_server_exceptions=True) as c:
        c.app.state.store = MemorySelectionStore()
        yield c


def _unavailable() -> str:
    raise SourceUnavailableError("Could not fetch the source and no cached copy is available.")


# ---------------------------------------------------------------------------
# GET /links
# ---------------------------------------------------------------------------

class TestListGroups:
    def test_returns_groups_in_order(self, client):
        resp = client.get("/links")
        assert resp.status_code == 200
        data = resp.json()
        assert [g["name"] for g in data] == ["A", "B"]
        assert data[1]["links"] == [
            {"name": "y", "url": "http://b", "selected": False},
            {"name": "z", "url": "http://c", "selected": False},
        ]

    def test_applies_stored_selection(self, client):
        client.app.state.store.replace_all(["http://a"])
        data = client.get("/links").json()
        flags = {l["url"]: l["selected"] for g in data for l in g["links"]}
        assert flags == {"http://a": True, "http://b": False, "http://c": False}

    def test_search_filter(self, client):
        data = client.get("/links", params={"q": "Z"}).json()
        assert [(g["name"], [l["name"] for l in g["links"]]) for g in data] == [("B", ["z"])]

    def test_selected_only_filter(self, client):
        client.app.state.store.replace_all(["http://c"])
        data = client.get("/links", params={"selected_only": "true"}).json()
        assert [l["url"] for g in data for l in g["links"]] == ["http://c"]

    def test_source_unavailable_is_503(self, client, monkeypatch):
        monkeypatch.setattr("backend.api.routers.links.load_document", _unavailable)
        resp = client.get("/links")
        assert resp.status_code == 503
        assert "no cached copy" in resp.json()["detail"]

    def test_empty_document_returns_empty_list(self, client, monkeypatch):
        monkeypatch.setattr("backend.api.routers.links.load_document", lambda: "")
        resp = client.get("/links")
        assert resp.status_code == 200
        assert resp.json() == []


# ---------------------------------------------------------------------------
# /links/selection
# ---------------------------------------------------------------------------

class TestSelection:
    def test_get_empty(self, client):
        assert client.get("/links/selection").json() == {"urls": []}

    def test_post_replaces_whole_set(self, client):
        client.app.state.store.replace_all(["http://old"])
        resp = client.post("/links/selection", json={"urls": ["http://a", "http://b"]})
        assert resp.status_code == 200
        assert resp.json() == {"ok": True, "count": 2}
        assert client.get("/links/selection").json() == {"urls": ["http://a", "http://b"]}

    def test_post_filters_non_strings(self, client):
        resp = client.post("/links/selection", json={"urls": ["http://a", 1, None, "http://a"]})
        assert resp.json() == {"ok": True, "count": 1}
        assert client.app.state.store.get_all() == {"http://a"}

    @pytest.mark.parametrize("key", ["selectedUrls", "selected"])
    def test_alternative_keys(self, client, key):
        resp = client.post("/links/selection", json={key: ["http://c"]})
        assert resp.status_code == 200
        assert client.app.state.store.get_all() == {"http://c"}

    def test_empty_list_clears(self, client):
        client.app.state.store.replace_all(["http://a"])
        resp = client.post("/links/selection", json={"urls": []})
        assert resp.json() == {"ok": True, "count": 0}
        assert client.app.state.store.get_all() == set()

    def test_missing_array_is_400(self, client):
        resp = client.post("/links/selection", json={"links": ["http://a"]})
        assert resp.status_code == 400
        assert "urls" in resp.json()["detail"]

    def test_non_list_value_is_422(self, client):
        resp = client.post("/links/selection", json={"urls": "http://a"})
        assert resp.status_code == 422

    def test_write_failure_is_500(self, client):
        client.app.state.store = FailingStore()
        resp = client.post("/links/selection", json={"urls": ["http://a"]})
        assert resp.status_code == 500


# ---------------------------------------------------------------------------
# POST /links/toggle
# ---------------------------------------------------------------------------

class TestToggle:
    def test_toggle_selects(self, client):
        client.app.state.store.replace_all(["http://a"])
        resp = client.post("/links/toggle", json={"url": "http://b"})
        assert resp.status_code == 200
        assert resp.json() == {"url": "http://b", "selected": True, "count": 2}
        assert client.app.state.store.get_all() == {"http://a", "http://b"}

    def test_toggle_twice_deselects(self, client):
        client.post("/links/toggle", json={"url": "http://b"})
        resp = client.post("/links/toggle", json={"url": "http://b"})
        assert resp.json()["selected"] is False
        assert client.app.state.store.get_all() == set()

    def test_toggle_write_failure_leaves_store(self, client):
        client.app.state.store = FailingStore({"http://a"})
        resp = client.post("/links/toggle", json={"url": "http://b"})
        assert resp.status_code == 500
        assert client.app.state.store.get_all() == {"http://a"}

    def test_toggle_source_unavailable(self, client, monkeypatch):
        monkeypatch.setattr("backend.api.routers.links.load_document", _unavailable)
        resp = client.post("/links/toggle", json={"url": "http://b"})
        assert resp.status_code == 503

    def test_missing_url_is_422(self, client):
        assert client.post("/links/toggle", json={}).status_code == 422


# ---------------------------------------------------------------------------
# GET /links/export
# ---------------------------------------------------------------------------

class TestExport:
    def test_nothing_selected_is_400(self, client):
        assert client.get("/links/export").status_code == 400

    def test_exports_selected_pairs(self, client):
        client.app.state.store.replace_all(["http://c", "http://a"])
        resp = client.get("/links/export")
        assert resp.status_code == 200
        assert resp.json() == {
            "links": [
                {"name": "x", "url": "http://a"},
                {"name": "z", "url": "http://c"},
            ]
        }


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

def _response_ref(schema: dict, path: str, method: str) -> str:
    content = schema["paths"][path][method]["responses"]["200"]["content"]
    return content["application/json"]["schema"]["$ref"].rsplit("/", 1)[-1]


class TestResponseSchemas:
    @pytest.mark.parametrize(
        "path, method, model",
        [
            ("/links/selection", "get", "SelectionOut"),
            ("/links/selection", "post", "SelectionWriteOut"),
            ("/links/toggle", "post", "ToggleOut"),
            ("/links/export", "get", "ExportOut"),
        ],
    )
    def test_endpoint_declares_typed_response(self, client, path, method, model):
        schema = client.get("/openapi.json").json()
        assert _response_ref(schema, path, method) == model

    def test_toggle_schema_fields(self, client):
        components = client.get("/openapi.json").json()["components"]["schemas"]
        toggle = components["ToggleOut"]
        assert set(toggle["properties"]) == {"url", "selected", "count"}
        assert set(toggle["required"]) == {"url", "selected", "count"}
        export_link = components["ExportLinkOut"]
        assert set(export_link["properties"]) == {"name", "url"}

"""FastAPI application factory.

Lifespan
--------
On startup the app opens the configured selection store (shared across all
requests via ``request.app.state.store``).  On shutdown it closes the store.

Routers
-------
    /links     — parsed link groups, selection set, toggles and export
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.db import open_selection_store

from backend.api.routers import links as links_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the selection store on startup and close it on shutdown."""
    store = open_selection_store()
    app.state.store = store
    try:
        yield
    finally:
        store.close()


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="RuleLinks API",
        description=(
            "Groups the rule-set links of a remote Markdown document by table "
            "and keeps track of which urls the user has selected."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(links_router.router, prefix="/links", tags=["links"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn backend.api.app:app --reload
app = create_app()

# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import HTMLResponse

from core.alchemy import IngredientCatalog, PlayerParams

from . import __version__
from .api import router as api_router
from .sessions import SessionStore
from .settings import AlembicSettings
from .ui import render_index_html

logger = logging.getLogger(__name__)


def create_app(
    catalog_path: Path,
    *,
    root_path: str = "",
    cors_allow_origins: Optional[Sequence[str]] = None,
    gzip_minimum_size: int = 800,
    auto_reload_catalog: bool = False,
    max_sessions: int = 256,
    default_params: Optional[PlayerParams] = None,
) -> FastAPI:
    """FastAPI app factory."""

    rp = AlembicSettings.normalize_root_path(root_path)

    app = FastAPI(
        title="Arcadia Alembic API",
        version=__version__,
        root_path=rp,
        docs_url="/docs",
        redoc_url=None,
    )

    # state (an unreadable catalog degrades to an empty one)
    app.state.catalog = IngredientCatalog(Path(catalog_path))
    app.state.auto_reload_catalog = bool(auto_reload_catalog)
    app.state.sessions = SessionStore(max_sessions=max_sessions, default_params=default_params)
    logger.info("Alembic ready: %d ingredients from %s", len(app.state.catalog), catalog_path)

    # middleware
    if gzip_minimum_size and gzip_minimum_size > 0:
        app.add_middleware(GZipMiddleware, minimum_size=int(gzip_minimum_size))

    if cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(cors_allow_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # routes
    app.include_router(api_router)

    @app.get("/healthz")
    def healthz():
        return {"ok": True}

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request):
        # root_path is already applied by FastAPI; still need it for frontend URL prefixing
        root = request.scope.get("root_path") or ""
        return HTMLResponse(render_index_html(app_root=str(root)))

    return app

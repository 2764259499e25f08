# -*- coding: utf-8 -*-
from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from core.alchemy import (
    AlchemyError,
    BrewSession,
    DuplicateIngredient,
    IngredientCatalog,
    SelectionSet,
    SlotsFull,
    UnknownIngredient,
    evaluate,
    parse_player_params,
    rank_for_level,
)
from core.alchemy.params import RANKS
from core.version import versions

from .sessions import SessionStore


def get_catalog(request: Request) -> IngredientCatalog:
    """Resolve the ingredient catalog from app state (with optional auto-reload)."""

    catalog: IngredientCatalog = request.app.state.catalog  # type: ignore[attr-defined]
    if bool(getattr(request.app.state, "auto_reload_catalog", False)):
        catalog.load(force=False)
    return catalog


def get_sessions(request: Request) -> SessionStore:
    return request.app.state.sessions  # type: ignore[attr-defined]


def _cache_headers(request: Request, *, max_age: int, etag: Optional[str] = None) -> Dict[str, str]:
    if max_age <= 0:
        return {}
    if bool(getattr(request.app.state, "auto_reload_catalog", False)):
        return {}
    headers = {"Cache-Control": f"public, max-age={int(max_age)}"}
    if etag:
        headers["ETag"] = str(etag)
    return headers


def _json(data: Dict[str, Any], *, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(content=data, headers=headers or {})


def _http_error(exc: AlchemyError) -> HTTPException:
    if isinstance(exc, (SlotsFull, DuplicateIngredient)):
        code = 409
    elif isinstance(exc, UnknownIngredient):
        code = 404
    else:
        # InvalidSlot and anything else caller-facing
        code = 400
    return HTTPException(status_code=code, detail={"error": type(exc).__name__, "message": str(exc)})


def _resolve(catalog: IngredientCatalog, name: str):
    ing = catalog.get(name)
    if ing is None:
        raise UnknownIngredient(name)
    return ing


router = APIRouter(prefix="/api/v1")


class EvaluateRequest(BaseModel):
    ingredients: List[str] = Field(default_factory=list)
    level: Optional[Union[int, str]] = None
    perks: Optional[Union[int, str]] = None


class SessionCreateRequest(BaseModel):
    level: Optional[Union[int, str]] = None
    perks: Optional[Union[int, str]] = None


class SlotAddRequest(BaseModel):
    name: str


class ParamsRequest(BaseModel):
    level: Optional[Union[int, str]] = None
    perks: Optional[Union[int, str]] = None


@router.get("/meta")
def meta(request: Request, catalog: IngredientCatalog = Depends(get_catalog)):
    m: Dict[str, Any] = dict(versions())
    m.update({"catalog": catalog.meta()})
    m.update({"ranks": [{"min_level": lvl, "rank": label} for lvl, label in RANKS]})
    m.update({"slots": SelectionSet().capacity})
    etag = f'W/"meta-{int(catalog.mtime())}-{len(catalog)}"'
    return _json(m, headers=_cache_headers(request, max_age=60, etag=etag))


@router.get("/ingredients")
def ingredients(
    request: Request,
    q: str = Query("", max_length=200),
    catalog: IngredientCatalog = Depends(get_catalog),
):
    items = [i.to_dict() for i in catalog.search(q)]
    etag = f'W/"ingredients-{int(catalog.mtime())}-{len(items)}-{q.strip().lower()}"'
    headers = _cache_headers(request, max_age=300, etag=etag)
    return _json({"q": q, "items": items, "count": len(items), "total": len(catalog)}, headers=headers)


@router.post("/evaluate")
def evaluate_once(req: EvaluateRequest, catalog: IngredientCatalog = Depends(get_catalog)):
    """Stateless evaluation of a list of ingredient names."""
    params = parse_player_params(req.level, req.perks)
    selection = SelectionSet()
    try:
        for name in req.ingredients:
            selection.add(_resolve(catalog, name))
    except AlchemyError as exc:
        raise _http_error(exc) from exc
    result = evaluate(selection, params)
    return {"params": params.to_dict(), "rank": rank_for_level(params.level), "result": result.to_dict()}


def _session_or_404(sessions: SessionStore, sid: str) -> BrewSession:
    sess = sessions.get(sid)
    if sess is None:
        raise HTTPException(status_code=404, detail={"error": "UnknownSession", "message": f"Unknown session: {sid}"})
    return sess


def _session_payload(sid: str, sess: BrewSession) -> Dict[str, Any]:
    out = sess.snapshot()
    out["id"] = sid
    return out


@router.post("/sessions", status_code=201)
def session_create(req: Optional[SessionCreateRequest] = None, sessions: SessionStore = Depends(get_sessions)):
    params = parse_player_params(req.level, req.perks) if req is not None else None
    sid = sessions.create(params)
    return _session_payload(sid, _session_or_404(sessions, sid))


@router.get("/sessions/{sid}")
def session_get(sid: str, sessions: SessionStore = Depends(get_sessions)):
    return _session_payload(sid, _session_or_404(sessions, sid))


@router.delete("/sessions/{sid}")
def session_drop(sid: str, sessions: SessionStore = Depends(get_sessions)):
    if not sessions.drop(sid):
        raise HTTPException(status_code=404, detail={"error": "UnknownSession", "message": f"Unknown session: {sid}"})
    return {"ok": True, "id": sid}


@router.post("/sessions/{sid}/slots")
def session_add(
    sid: str,
    req: SlotAddRequest,
    sessions: SessionStore = Depends(get_sessions),
    catalog: IngredientCatalog = Depends(get_catalog),
):
    sess = _session_or_404(sessions, sid)
    try:
        slot, _ = sess.place(_resolve(catalog, req.name))
    except AlchemyError as exc:
        raise _http_error(exc) from exc
    out = _session_payload(sid, sess)
    out["slot"] = slot
    return out


@router.delete("/sessions/{sid}/slots/{slot}")
def session_remove(sid: str, slot: int, sessions: SessionStore = Depends(get_sessions)):
    sess = _session_or_404(sessions, sid)
    try:
        sess.remove(slot)
    except AlchemyError as exc:
        raise _http_error(exc) from exc
    return _session_payload(sid, sess)


@router.post("/sessions/{sid}/clear")
def session_clear(sid: str, sessions: SessionStore = Depends(get_sessions)):
    sess = _session_or_404(sessions, sid)
    sess.clear()
    return _session_payload(sid, sess)


@router.put("/sessions/{sid}/params")
def session_params(sid: str, req: ParamsRequest, sessions: SessionStore = Depends(get_sessions)):
    sess = _session_or_404(sessions, sid)
    sess.set_params(level=req.level, perks=req.perks)
    return _session_payload(sid, sess)

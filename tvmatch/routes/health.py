# tvmatch/routes/health.py
from __future__ import annotations

from fastapi import APIRouter, Request

from tvmatch.services.health import ping_tmdb

router = APIRouter(tags=["Health"])


@router.get("/health", summary="Liveness")
async def health():
    # no external calls
    return {"ok": True}


@router.get("/ready", summary="Readiness (TMDb reachable with our key)")
async def ready(request: Request):
    ok, info = await ping_tmdb(getattr(request.app.state, "tmdb", None))
    return {"ok": ok, "tmdb": info}

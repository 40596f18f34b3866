# tvmatch/routes/env.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from tvmatch.core.settings import Settings
from tvmatch.routes.tmdb import get_settings
from tvmatch.schemas import BrowserEnvOut

router = APIRouter(tags=["env"])


@router.get("/env", response_model=BrowserEnvOut)
async def browser_env(settings: Settings = Depends(get_settings)) -> JSONResponse:
    """Expose the browser-side TMDb key (TMDB_KEY). The server key is never returned."""
    body = BrowserEnvOut(TMDB_KEY=settings.tmdb_browser_key or "")
    return JSONResponse(content=body.model_dump(), headers={"cache-control": "no-store"})

# tvmatch/main.py — app factory: settings injection, CORS, error handlers, routers
# run: uvicorn --factory tvmatch.main:create_app

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tvmatch.core.errors import TMDBConfigError, install_error_handlers
from tvmatch.core.settings import Settings
from tvmatch.integrations.tmdb import TMDBClient
from tvmatch.routes import env as env_routes
from tvmatch.routes import health as health_routes
from tvmatch.routes import tmdb as tmdb_routes

log = logging.getLogger("startup")


def _build_tmdb_client(settings: Settings) -> Optional[TMDBClient]:
    try:
        return TMDBClient.from_settings(settings)
    except TMDBConfigError:
        # keep serving /health and /env; /tmdb answers with the config error
        log.error("TMDB_API_KEY is not set; /api/tmdb requests will fail with 500")
        return None


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title="tvmatch API",
        version="1.0.0",
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.tmdb = _build_tmdb_client(settings)

    # ───────────────── CORS ─────────────────
    # No cookies involved, so no credentials.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    install_error_handlers(app)

    # Single API namespace prefix
    api = APIRouter(prefix="/api")
    for router in (health_routes.router, env_routes.router, tmdb_routes.router):
        api.include_router(router)
        log.info("Mounted router: %s", getattr(router, "prefix", "") or router.tags)

    app.include_router(api)
    return app

# tvmatch/core/errors.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tvmatch.schemas import ErrorOut

logger = logging.getLogger(__name__)


class TMDBConfigError(RuntimeError):
    """Server-side TMDb credential is not configured."""

    def __init__(self, message: str = "Missing TMDB_API_KEY") -> None:
        super().__init__(message)


class QueryError(ValueError):
    """Bad or missing client input; nothing is sent upstream."""


class TMDBError(RuntimeError):
    """
    Upstream TMDb failure (non-2xx status or transport error).
    `status_code` is None for transport errors.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def retryable(self) -> bool:
        if self.status_code is None:
            return True
        return self.status_code == 429 or self.status_code >= 500


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorOut(error=str(exc)).model_dump())


async def _config_error(request: Request, exc: TMDBConfigError) -> JSONResponse:
    return _error(500, exc)


async def _query_error(request: Request, exc: QueryError) -> JSONResponse:
    return _error(400, exc)


async def _tmdb_error(request: Request, exc: TMDBError) -> JSONResponse:
    logger.warning("TMDb failure on %s: %s", request.url.path, exc)
    return _error(500, exc)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TMDBConfigError, _config_error)
    app.add_exception_handler(QueryError, _query_error)
    app.add_exception_handler(TMDBError, _tmdb_error)

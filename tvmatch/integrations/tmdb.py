# tvmatch/integrations/tmdb.py
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List

import httpx
from tenacity import before_sleep_log, retry, retry_if_exception, stop_after_attempt, wait_exponential_jitter

from tvmatch.core.errors import TMDBConfigError, TMDBError
from tvmatch.core.settings import Settings

logger = logging.getLogger(__name__)

TMDB_BASE = "https://api.themoviedb.org/3"


def _is_retryable(exc: BaseException) -> bool:
    return isinstance(exc, TMDBError) and exc.retryable


def retrying(attempts: int, max_wait: float) -> Callable:
    """Bounded retry with exponential backoff + jitter for transient TMDb failures (5xx/429/transport)."""
    return retry(
        stop=stop_after_attempt(max(1, attempts)),
        wait=wait_exponential_jitter(0.5, max_wait),
        retry=retry_if_exception(_is_retryable),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


class TMDBClient:
    def __init__(
        self,
        api_key: str,
        base: str = TMDB_BASE,
        *,
        language: str = "en-US",
        timeout: float = 20.0,
        retry_attempts: int = 3,
        retry_max_wait: float = 4.0,
    ):
        if not api_key:
            raise TMDBConfigError()
        self.api_key = api_key
        self.base = base.rstrip("/")
        self.language = language
        self.timeout = timeout
        # retry wraps the raw GET only; callers never see intermediate failures
        self._get_json = retrying(retry_attempts, retry_max_wait)(self._get_json_once)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TMDBClient":
        return cls(
            api_key=settings.tmdb_api_key or "",
            base=settings.tmdb_base,
            language=settings.tmdb_language,
            timeout=settings.tmdb_timeout,
            retry_attempts=settings.tmdb_retry_attempts,
            retry_max_wait=settings.tmdb_retry_max_wait,
        )

    async def _get_json_once(self, path: str, params: Dict[str, Any], what: str) -> Dict[str, Any]:
        params = {"api_key": self.api_key, **params}
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                r = await client.get(f"{self.base}{path}", params=params)
            except httpx.RequestError as e:
                raise TMDBError(f"{what} failed: {type(e).__name__}") from e

        if not r.is_success:
            logger.warning("%s -> HTTP %s", what, r.status_code)
            raise TMDBError(f"{what} failed: {r.status_code}", status_code=r.status_code)
        try:
            data = r.json()
        except ValueError as e:
            raise TMDBError(f"{what} failed: invalid JSON", status_code=r.status_code) from e
        if not isinstance(data, dict):
            raise TMDBError(f"{what} failed: invalid JSON", status_code=r.status_code)
        return data

    async def search_tv(self, q: str) -> List[Dict[str, Any]]:
        """TV-only search; no year filter so near-year matches are still returned."""
        params = {"query": q, "include_adult": "false", "language": self.language}
        data = await self._get_json("/search/tv", params, "TMDB search")
        return data.get("results") or []

    async def tv_detail(self, tv_id: int) -> Dict[str, Any]:
        return await self._get_json(f"/tv/{int(tv_id)}", {}, "TMDB details")

    async def configuration(self) -> Dict[str, Any]:
        return await self._get_json("/configuration", {}, "TMDB configuration")

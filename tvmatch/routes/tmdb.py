# tvmatch/routes/tmdb.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Request
from pydantic import ValidationError

from tvmatch.core.errors import QueryError, TMDBConfigError, TMDBError
from tvmatch.core.settings import Settings
from tvmatch.integrations.tmdb import TMDBClient
from tvmatch.schemas import Candidate, MatchQuery, NoResultsOut, TvDetailOut
from tvmatch.services.title_match import select_best

router = APIRouter(prefix="/tmdb", tags=["tmdb"])
logger = logging.getLogger(__name__)

# what a 2xx TMDb body with unexpected shapes/types raises while being mapped
_MALFORMED = (ValidationError, TypeError, AttributeError, ValueError)


# ---------- dependencies ----------

def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_tmdb_client(request: Request) -> TMDBClient:
    client: Optional[TMDBClient] = getattr(request.app.state, "tmdb", None)
    if client is None:
        raise TMDBConfigError()
    return client


# ---------- helpers ----------

def _parse_year(raw: Optional[str]) -> Optional[int]:
    """'2011' -> 2011, '2011.5' -> 2011; '', '0', 'abc', '0x7db' -> None."""
    if not raw:
        return None
    try:
        return int(float(raw.strip())) or None
    except (ValueError, OverflowError):
        return None


# ---------- endpoints ----------

@router.get("", include_in_schema=False)
@router.get("/match")
async def tmdb_match(
    q: str = Query("", description="Free-text TV title"),
    year: Optional[str] = Query(None, description="First-air year hint"),
    tmdb: TMDBClient = Depends(get_tmdb_client),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """
    Search TMDb TV, pick the best match for (q, year), return its details.

    Returns {"note": "No results"} when TMDb finds nothing.
    """
    title = (q or "").strip()
    if not title:
        raise QueryError("Missing q")
    query = MatchQuery(title=title, year=_parse_year(year))

    results = await tmdb.search_tv(query.title)
    try:
        candidates = [Candidate.from_tmdb(r) for r in results]
    except _MALFORMED as e:
        raise TMDBError(f"TMDB search failed: malformed result ({type(e).__name__})") from e
    if not candidates:
        logger.info("TMDb search: no results for %r", query.title)
        return NoResultsOut().model_dump()

    best = select_best(query.title, query.year, candidates)
    logger.info("TMDb match %r (year=%s) -> id=%s %r", query.title, query.year, best.id, best.name)

    if best.id is None:
        raise TMDBError("TMDB search result has no id")

    details = await tmdb.tv_detail(best.id)
    if details.get("id") is None:
        details["id"] = best.id
    try:
        out = TvDetailOut.from_tmdb(details, settings.tmdb_web_base)
    except _MALFORMED as e:
        raise TMDBError(f"TMDB details failed: malformed payload ({type(e).__name__})") from e
    return out.model_dump(by_alias=True)

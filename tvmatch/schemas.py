from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ── Search candidates ────────────────────────────────────────────────────────

class Candidate(BaseModel):
    """One TMDb /search/tv result, pre-match."""

    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    name: str = ""
    first_air_date: Optional[str] = None
    popularity: Optional[float] = None
    vote_average: Optional[float] = None
    poster_path: Optional[str] = None

    @classmethod
    def from_tmdb(cls, item: Dict[str, Any]) -> "Candidate":
        return cls(
            id=item.get("id"),
            name=item.get("name") or "",
            first_air_date=item.get("first_air_date") or None,
            popularity=item.get("popularity"),
            vote_average=item.get("vote_average"),
            poster_path=item.get("poster_path"),
        )


class MatchQuery(BaseModel):
    title: str
    year: Optional[int] = None


# ── Responses ────────────────────────────────────────────────────────────────

class TvDetailOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: Optional[str] = None
    overview: Optional[str] = None
    date: Optional[str] = None
    vote_average: Optional[float] = None
    status: Optional[str] = None
    networks: List[str] = Field(default_factory=list)
    poster_path: Optional[str] = None
    tmdb_url: str = Field(alias="tmdbUrl")

    @classmethod
    def from_tmdb(cls, data: Dict[str, Any], web_base: str) -> "TvDetailOut":
        tmdb_id = int(data["id"])
        return cls(
            id=tmdb_id,
            name=data.get("name"),
            overview=data.get("overview"),
            date=data.get("first_air_date") or None,
            vote_average=data.get("vote_average"),
            status=data.get("status"),
            networks=[
                n.get("name") for n in (data.get("networks") or [])
                if isinstance(n, dict) and n.get("name")
            ],
            poster_path=data.get("poster_path"),
            tmdbUrl=f"{web_base.rstrip('/')}/tv/{tmdb_id}",
        )


class NoResultsOut(BaseModel):
    note: str = "No results"


class ErrorOut(BaseModel):
    error: str


class BrowserEnvOut(BaseModel):
    TMDB_KEY: str = ""

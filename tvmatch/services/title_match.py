# tvmatch/services/title_match.py
"""
Pick the TMDb search result that best matches a free-text title (+ optional year).

TMDb's /search/tv ranking is noisy: remakes, spin-offs and foreign titles often
outrank the show the user typed. We resolve it in two tiers:

  1) exact normalized title (with or without spaces) -> closest year, then popularity
  2) token-overlap (Jaccard) + year closeness + popularity, weak matches dropped

If nothing survives tier 2 we fall back to the first search result, so a
non-empty list always yields one of its own elements.
"""
from __future__ import annotations

import logging
import re
import unicodedata
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from tvmatch.schemas import Candidate

logger = logging.getLogger(__name__)

STOP_WORDS = frozenset({"the", "a", "an", "of", "and", "or", "with", "to"})

# Weights for the similarity tier
W_TITLE = 3.0
W_YEAR = 1.0
W_POPULARITY = 0.5
MIN_SCORE = 0.3
NO_YEAR_SCORE = 0.2
YEAR_STEPS = {0: 1.0, 1: 0.6, 2: 0.3}

_DROP = re.compile(r"[.'’]")
_SEPARATORS = re.compile(r"[:—–-]")
_NON_ALNUM = re.compile(r"[^a-z0-9 ]+")
_SPACES = re.compile(r"\s+")


# ---------- normalization ----------

def normalize(text: Optional[str]) -> str:
    """'Mr. Robot' -> 'mr robot', 'Law & Order' -> 'law and order', 'M*A*S*H' -> 'm a s h'."""
    s = unicodedata.normalize("NFKD", (text or "").lower())
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    s = _DROP.sub("", s)
    s = s.replace("&", "and")
    s = _SEPARATORS.sub(" ", s)
    s = _NON_ALNUM.sub(" ", s)
    return _SPACES.sub(" ", s).strip()


def normalize_no_space(text: Optional[str]) -> str:
    return _SPACES.sub("", normalize(text))


def tokenize(text: Optional[str]) -> List[str]:
    return [t for t in normalize(text).split(" ") if t and t not in STOP_WORDS]


def jaccard_similarity(a: Iterable[str], b: Iterable[str]) -> float:
    sa, sb = set(a), set(b)
    union = sa | sb
    if not union:
        return 0.0
    return len(sa & sb) / len(union)


# ---------- scoring ----------

def candidate_year(c: Candidate) -> Optional[int]:
    """Year from first_air_date ('YYYY-MM-DD' or 'YYYY'); None if missing/unparseable/zero."""
    d = c.first_air_date or ""
    try:
        y = int(d[:4])
    except ValueError:
        return None
    return y or None


def year_score(cand_year: Optional[int], query_year: Optional[int]) -> float:
    if not cand_year:
        return NO_YEAR_SCORE
    if not query_year:
        return 0.0
    return YEAR_STEPS.get(abs(cand_year - query_year), 0.0)


def score_candidate(
    query_tokens: Sequence[str],
    query_year: Optional[int],
    c: Candidate,
) -> float:
    jac = jaccard_similarity(query_tokens, tokenize(c.name))
    pop = (c.popularity or 0.0) / 100.0
    return W_TITLE * jac + W_YEAR * year_score(candidate_year(c), query_year) + W_POPULARITY * pop


@dataclass(frozen=True)
class ScoredCandidate:
    candidate: Candidate
    score: float


def rank_candidates(
    title: str,
    year: Optional[int],
    candidates: Sequence[Candidate],
) -> List[ScoredCandidate]:
    """Similarity-tier ranking: scores > MIN_SCORE only, best first (stable on ties)."""
    q_tokens = tokenize(title)
    scored = [ScoredCandidate(c, score_candidate(q_tokens, year, c)) for c in candidates]
    kept = [s for s in scored if s.score > MIN_SCORE]
    kept.sort(key=lambda s: s.score, reverse=True)
    return kept


# ---------- selection ----------

def exact_matches(title: str, candidates: Sequence[Candidate]) -> List[Candidate]:
    n_in = normalize(title)
    ns_in = normalize_no_space(title)
    return [
        c for c in candidates
        if normalize(c.name) == n_in or normalize_no_space(c.name) == ns_in
    ]


def select_best(
    title: str,
    year: Optional[int],
    candidates: Sequence[Candidate],
) -> Candidate:
    """
    Return the best candidate for (title, year). Always one of `candidates`.
    Raises ValueError on an empty list; callers handle "no results" themselves.
    """
    if not candidates:
        raise ValueError("select_best() needs at least one candidate")

    exacts = exact_matches(title, candidates)
    if exacts:
        # missing years compare as 0 on both sides
        qy = year or 0
        best = sorted(
            exacts,
            key=lambda c: (abs((candidate_year(c) or 0) - qy), -(c.popularity or 0.0)),
        )[0]
        logger.debug("exact match for %r (year=%s): %r", title, year, best.name)
        return best

    ranked = rank_candidates(title, year, candidates)
    if ranked:
        top = ranked[0]
        logger.debug("scored match for %r (year=%s): %r score=%.3f", title, year, top.candidate.name, top.score)
        return top.candidate

    logger.debug("no candidate above %.1f for %r; falling back to first result", MIN_SCORE, title)
    return candidates[0]

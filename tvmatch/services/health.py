# tvmatch/services/health.py
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from tvmatch.core.errors import TMDBError
from tvmatch.integrations.tmdb import TMDBClient


async def ping_tmdb(client: Optional[TMDBClient]) -> Tuple[bool, Dict[str, Any]]:
    """
    Calls /configuration with the server key.
    """
    if client is None:
        return False, {"error": "missing_api_key"}
    try:
        data = await client.configuration()
    except TMDBError as e:
        if e.status_code is not None:
            return False, {"status_code": e.status_code}
        return False, {"error": str(e)}
    return True, {"images_base_url": (data.get("images") or {}).get("base_url")}

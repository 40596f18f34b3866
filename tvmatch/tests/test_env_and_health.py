# tvmatch/tests/test_env_and_health.py
import httpx
import pytest
import respx

from tvmatch.main import create_app

TMDB = "https://api.themoviedb.org/3"


@pytest.mark.asyncio
async def test_health(client: httpx.AsyncClient):
    r = await client.get("/api/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


@pytest.mark.asyncio
async def test_openapi_is_served(client: httpx.AsyncClient):
    r = await client.get("/api/openapi.json")
    assert r.status_code == 200
    assert "/api/tmdb/match" in r.json()["paths"]


@pytest.mark.asyncio
async def test_env_exposes_browser_key_only(client: httpx.AsyncClient):
    r = await client.get("/api/env")
    assert r.status_code == 200
    assert r.json() == {"TMDB_KEY": "browser-key"}
    assert r.headers["cache-control"] == "no-store"
    assert "server-key" not in r.text


@pytest.mark.asyncio
async def test_env_without_browser_key_is_empty_string(make_settings):
    app = create_app(make_settings(tmdb_browser_key=None))
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver") as ac:
        r = await ac.get("/api/env")
    assert r.status_code == 200
    assert r.json() == {"TMDB_KEY": ""}


@respx.mock
@pytest.mark.asyncio
async def test_ready_pings_tmdb(client: httpx.AsyncClient):
    route = respx.get(f"{TMDB}/configuration").mock(
        return_value=httpx.Response(200, json={"images": {"base_url": "http://image.tmdb.org/t/p/"}}),
    )
    r = await client.get("/api/ready")
    assert r.status_code == 200
    assert r.json() == {"ok": True, "tmdb": {"images_base_url": "http://image.tmdb.org/t/p/"}}
    assert route.calls.last.request.url.params["api_key"] == "server-key"


@respx.mock
@pytest.mark.asyncio
async def test_ready_reports_tmdb_rejection(client: httpx.AsyncClient):
    respx.get(f"{TMDB}/configuration").mock(return_value=httpx.Response(401))
    r = await client.get("/api/ready")
    assert r.status_code == 200
    assert r.json() == {"ok": False, "tmdb": {"status_code": 401}}


@pytest.mark.asyncio
async def test_ready_without_key(keyless_client: httpx.AsyncClient):
    r = await keyless_client.get("/api/ready")
    assert r.status_code == 200
    assert r.json() == {"ok": False, "tmdb": {"error": "missing_api_key"}}

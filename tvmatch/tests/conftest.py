# tvmatch/tests/conftest.py
import httpx
import pytest

from tvmatch.core.settings import Settings
from tvmatch.main import create_app

TMDB = "https://api.themoviedb.org/3"


def make_settings(**overrides) -> Settings:
    """Test settings: no .env, fixed keys, fast retries."""
    values = dict(
        tmdb_api_key="server-key",
        tmdb_browser_key="browser-key",
        tmdb_base=TMDB,
        tmdb_web_base="https://www.themoviedb.org",
        tmdb_retry_attempts=2,
        tmdb_retry_max_wait=0,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
async def client(settings: Settings):
    app = create_app(settings)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
async def keyless_client():
    app = create_app(make_settings(tmdb_api_key=None))
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture(name="make_settings")
def make_settings_fixture():
    return make_settings

# tvmatch/core/settings.py
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # --- TMDb (server side, never sent to the browser) ---
    tmdb_api_key: Optional[str] = Field(default=None, alias="TMDB_API_KEY")
    tmdb_base: str = Field(default="https://api.themoviedb.org/3", alias="TMDB_BASE")
    tmdb_web_base: str = Field(default="https://www.themoviedb.org", alias="TMDB_WEB_BASE")
    tmdb_language: str = Field(default="en-US", alias="TMDB_LANGUAGE")
    tmdb_timeout: float = Field(default=20.0, gt=0, alias="TMDB_TIMEOUT")

    # Bounded retry around upstream calls (1 = no retry)
    tmdb_retry_attempts: int = Field(default=3, ge=1, alias="TMDB_RETRY_ATTEMPTS")
    tmdb_retry_max_wait: float = Field(default=4.0, ge=0, alias="TMDB_RETRY_MAX_WAIT")

    # --- Browser key (exposed by /api/env) ---
    tmdb_browser_key: Optional[str] = Field(default=None, alias="TMDB_KEY")

    # --- HTTP / logging ---
    cors_origins: List[str] = Field(default=["http://localhost:5173"], alias="CORS_ORIGINS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

from __future__ import annotations

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PORT: int = 3000
    DATABASE_URL: str
    DB_SSLMODE: str = "prefer"
    DB_POOL_MAX: int = 1
    CORS_ORIGINS: Optional[str] = "*"
    LOG_LEVEL: str = "INFO"
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # one credential per upstream data source
    GEOCODE_API_KEY: Optional[str] = None
    WEATHER_API_KEY: Optional[str] = None
    YELP_API_KEY: Optional[str] = None
    MOVIE_API_KEY: Optional[str] = None
    MEETUP_API_KEY: Optional[str] = None
    TRAIL_API_KEY: Optional[str] = None

    # blank variables fall back to the defaults above
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", env_ignore_empty=True)


settings = Settings()

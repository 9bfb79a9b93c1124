from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    database_url: str = Field("sqlite:///./tourism.db", alias="DATABASE_URL")
    supabase_url: str = Field("", alias="SUPABASE_URL")
    supabase_anon_key: str = Field("", alias="SUPABASE_ANON_KEY")
    google_api_key: str = Field("", alias="GOOGLE_API_KEY")
    gemini_model: str = Field("gemini-2.5-flash", alias="GEMINI_MODEL")
    gemini_base_url: str = Field(
        "https://generativelanguage.googleapis.com/v1beta",
        alias="GEMINI_BASE_URL",
    )
    google_maps_api_key: str = Field("", alias="GOOGLE_MAPS_API_KEY")
    google_maps_embed_api_key: str = Field("", alias="GOOGLE_MAPS_EMBED_API_KEY")
    map_zoom: int = Field(14, alias="MAP_ZOOM")
    default_country: str = Field("Barbados", alias="DEFAULT_COUNTRY")
    http_trust_env: bool = Field(False, alias="HTTP_TRUST_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

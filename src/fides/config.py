"""Application configuration and settings management."""

from typing import Any

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="FIDES_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Fides Churches API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Level applied to the 'fides' logger.")
    overpass_url: str = Field(
        default="https://overpass-api.de/api/interpreter",
        description="Overpass API interpreter endpoint used for church searches.",
    )
    overpass_query_timeout_seconds: int = Field(
        default=25,
        ge=1,
        description="Server-side timeout embedded in every Overpass QL query.",
    )
    http_timeout_seconds: float = Field(default=30.0, gt=0.0)
    nominatim_base_url: str = Field(
        default="https://nominatim.openstreetmap.org",
        description="Base URL for the Nominatim reverse geocoding service.",
    )
    http_user_agent: str = Field(
        default="Fides App",
        description="Identifying User-Agent sent to Overpass and Nominatim (required by their usage policies).",
    )
    nominatim_min_interval_seconds: float = Field(default=1.1, ge=1.1)
    default_search_radius_m: int = Field(default=10000, ge=1)
    max_search_radius_m: int = Field(default=50000, ge=1)
    search_cache_ttl_seconds: float = Field(default=30 * 60, ge=0.0)
    enrichment_limit: int = Field(default=10, ge=0, le=10)
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:8080",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @field_validator("overpass_url", "nominatim_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


settings = Settings()

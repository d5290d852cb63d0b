from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    api_title: str = "Inline Calc API"
    api_version: str = "0.1.0"

    log_level: str = "INFO"

    decimal_precision: int = Field(1000, ge=28)
    division_places: int = Field(20, ge=0)
    max_exact_digits: int = Field(100_000, ge=1, le=10_000_000)
    fraction_digits: int = Field(20, ge=0)
    cache_max_entries: int | None = Field(default=None, ge=1)

    calc_http_base_url: str | None = None
    calc_http_timeout_sec: float = 5.0

    cors_origins: List[str] = Field(
        default_factory=lambda: [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ]
    )

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def resolved_cors_origins(self) -> List[str]:
        """
        Returns the configured CORS origins without trailing slashes, deduped.
        """
        normalized: list[str] = []
        for origin in self.cors_origins:
            if not origin:
                continue
            cleaned = origin.rstrip("/")
            if cleaned not in normalized:
                normalized.append(cleaned)
        return normalized


@lru_cache
def get_settings() -> AppSettings:
    return AppSettings()

"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - error_percentage bounded 0–100; error_codes are 4xx/5xx; success_code is 2xx

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: the server runs with no configuration at all
    - CLI flags (mockserver.__main__) override settings, they do not replace them
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from mockserver.core.status_picker import DEFAULT_ERROR_CODES


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Server
    host: str = "0.0.0.0"
    port: int = Field(8080, ge=1, le=65535)

    # Startup routes (YAML); unset means the registry starts empty
    routes_file: str | None = None

    # /errors
    error_percentage: int = Field(50, ge=0, le=100)
    error_codes: list[int] = list(DEFAULT_ERROR_CODES)
    success_code: int = Field(200, ge=200, le=299)

    @field_validator("error_codes")
    @classmethod
    def check_error_codes(cls, v: list[int]) -> list[int]:
        if not v:
            raise ValueError("error_codes must not be empty")
        bad = [c for c in v if not 400 <= c <= 599]
        if bad:
            raise ValueError(f"error_codes must be 400-599, got {bad}")
        return v

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"
    access_log: bool = True


@lru_cache
def get_settings() -> Settings:
    return Settings()

"""Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting has a working default; nothing is required from the environment
    - default_consumes/default_produces are non-empty and only hold
      non-empty MIME vocabulary values
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - APIBIND_ env prefix and optional .env file
    - Settings feed the composition root (Registry.from_settings), never
      read implicitly by core/
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from apibind.core.domain_types import MIME


class Settings(BaseSettings):
    """Settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="APIBIND_", env_file=".env", case_sensitive=False,
    )

    # Route tree
    root_path: str = "/"
    root_description: str = ""
    default_consumes: list[str] = [MIME.ALL.value]
    default_produces: list[str] = [MIME.ALL.value]

    @field_validator("default_consumes", "default_produces")
    @classmethod
    def check_vocabulary(cls, v: list[str]) -> list[str]:
        if not v or any(ct == MIME.NONE.value for ct in v):
            raise ValueError("content type lists must be non-empty and hold no empty entries")
        known = {m.value for m in MIME}
        unknown = [ct for ct in v if ct not in known]
        if unknown:
            raise ValueError(f"unknown content types: {', '.join(unknown)}")
        return v

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()

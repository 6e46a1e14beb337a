"""
navaccess.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for the resolver, logging, and the HTTP surface.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="NAVACCESS_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "navaccess"
    log_level: str = "INFO"

    # Navigation rendering
    menu_namespace: str = "admin.menus"
    menu_id_separator: str = Field(default="-", min_length=1, max_length=1)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Rule definitions are code, not configuration; only rendering knobs live here.

from __future__ import annotations

import logging
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # Session defaults
    SETS_PER_SUPERSET: int = 3
    SUPERSET_CONFIG: List[int] = [2, 2, 2, 2]
    REST_DURATION_SECONDS: int = 0
    SHOW_WARMUP: bool = True
    SHOW_COOLDOWN: bool = True
    SUGGESTION_DISPLAY_SECONDS: float = 5.0

    STORE_PATH: str = "data/workout_store.json"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]


def configure_logging(level: str | None = None) -> None:
    settings = get_settings()
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, Field, field_validator

from workout_engine.config import Settings, get_settings


class SessionConfig(BaseModel):
    supersets: List[int] = Field(default_factory=lambda: [2, 2, 2, 2])
    sets_per_superset: int = Field(3, ge=0)
    rest_duration_seconds: int = Field(0, ge=0)
    show_warmup: bool = True
    show_cooldown: bool = True
    suggestion_display_seconds: float = Field(5.0, ge=0)

    @field_validator("supersets")
    @classmethod
    def _positive_sizes(cls, v: List[int]) -> List[int]:
        if any(size < 1 for size in v):
            raise ValueError("superset sizes must be positive integers")
        return v

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **overrides: Any) -> "SessionConfig":
        s = settings or get_settings()
        values = {
            "supersets": list(s.SUPERSET_CONFIG),
            "sets_per_superset": s.SETS_PER_SUPERSET,
            "rest_duration_seconds": s.REST_DURATION_SECONDS,
            "show_warmup": s.SHOW_WARMUP,
            "show_cooldown": s.SHOW_COOLDOWN,
            "suggestion_display_seconds": s.SUGGESTION_DISPLAY_SECONDS,
        }
        values.update(overrides)
        return cls(**values)

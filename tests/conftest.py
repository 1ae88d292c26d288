from __future__ import annotations

from datetime import datetime, timezone
from typing import List

import pytest

from workout_engine.models import Exercise, SessionConfig
from workout_engine.storage import InMemoryStore


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.t = start

    def __call__(self) -> float:
        return self.t

    def advance(self, seconds: float) -> None:
        self.t += seconds


FIXED_NOW = datetime(2026, 1, 5, 12, 0, tzinfo=timezone.utc)


def fixed_now() -> datetime:
    return FIXED_NOW


def make_exercise(name: str, sets: int | None = None, muscle: str = "Chest", equipment: str = "Barbell") -> Exercise:
    return Exercise(name=name, equipment=equipment, primary_muscle=muscle, sets=sets)


def make_plan(n: int) -> List[Exercise]:
    return [make_exercise(f"Exercise {i + 1}") for i in range(n)]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore(
        weights={"Bench Press": 100, "Row": 80},
        target_reps={"Bench Press": 8, "Row": 10},
    )


@pytest.fixture
def config() -> SessionConfig:
    return SessionConfig(
        supersets=[2],
        sets_per_superset=2,
        rest_duration_seconds=0,
        show_warmup=True,
        show_cooldown=True,
        suggestion_display_seconds=5,
    )

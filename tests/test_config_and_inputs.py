from __future__ import annotations

import pytest
from pydantic import ValidationError

from workout_engine.config import Settings
from workout_engine.models import Exercise, SessionConfig
from workout_engine.services.inputs import sanitize_reps, sanitize_weight


def test_session_config_from_settings_with_overrides() -> None:
    settings = Settings(SETS_PER_SUPERSET=4, SUPERSET_CONFIG=[3, 1], SHOW_WARMUP=False)
    cfg = SessionConfig.from_settings(settings, rest_duration_seconds=90)
    assert cfg.sets_per_superset == 4
    assert cfg.supersets == [3, 1]
    assert cfg.rest_duration_seconds == 90
    assert cfg.show_warmup is False and cfg.show_cooldown is True


def test_session_config_rejects_non_positive_group() -> None:
    with pytest.raises(ValidationError):
        SessionConfig(supersets=[2, 0])


def test_exercise_accepts_library_keys() -> None:
    ex = Exercise.model_validate({
        "Exercise Name": "Goblet Squat",
        "Equipment": "Bodyweight",
        "Primary Muscle": "Quads",
        "Secondary Muscles": "Glutes, Core ,",
    })
    assert ex.name == "Goblet Squat"
    assert ex.secondary_muscle_list == ["Glutes", "Core"]
    assert ex.is_bodyweight
    assert ex.sets is None


@pytest.mark.parametrize(
    "raw, expected",
    [(None, 0.0), ("", 0.0), ("abc", 0.0), (-10, 0.0), ("42.5", 42.5), (float("nan"), 0.0), (True, 0.0), (60, 60.0)],
)
def test_sanitize_weight(raw, expected) -> None:
    assert sanitize_weight(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [(None, 0), ("x", 0), (0, 0), (-2, 0), ("8", 8), (8.9, 8), ("10.0", 10), (float("inf"), 0)],
)
def test_sanitize_reps(raw, expected) -> None:
    assert sanitize_reps(raw) == expected

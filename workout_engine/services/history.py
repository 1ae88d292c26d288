from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Mapping, Optional, Sequence

from workout_engine.models.exercise import Exercise
from workout_engine.models.session import LastPerformance

WorkoutType = Literal["upper", "lower", "full"]


def parse_date(value: Any) -> Optional[datetime]:
    if not isinstance(value, str) or not value:
        return None
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _exercise_sets(entry: Mapping[str, Any], exercise_name: str) -> List[Mapping[str, Any]]:
    # Older entries use "exercises", summaries written by this package use "perExercise".
    exercises = entry.get("perExercise") or entry.get("exercises") or {}
    data = exercises.get(exercise_name) or {}
    return list(data.get("sets") or [])


def exercise_progression(
    history: Sequence[Mapping[str, Any]],
    exercise_name: str,
    mode: Literal["weight", "reps"] = "weight",
) -> List[Dict[str, Any]]:
    """Per-workout best value for one exercise, oldest first.

    Workouts where the exercise has no sets, no usable date, or a best value of
    zero are left out.
    """
    points: List[Dict[str, Any]] = []
    for entry in history or []:
        sets = _exercise_sets(entry, exercise_name)
        if not sets:
            continue
        date = parse_date(entry.get("date"))
        if date is None:
            continue
        value = max((s.get(mode) or 0) for s in sets)
        if value > 0:
            points.append({"date": date, "value": value, "workout": entry})
    points.sort(key=lambda p: p["date"])
    return points


def last_performance(history: Sequence[Mapping[str, Any]], exercise_name: str) -> Optional[LastPerformance]:
    """Heaviest set from the most recent workout that included the exercise.

    Ties on weight go to the earliest such set.
    """
    progression = exercise_progression(history, exercise_name, "weight")
    if not progression:
        return None
    sets = _exercise_sets(progression[-1]["workout"], exercise_name)
    best = sets[0]
    for s in sets[1:]:
        if (s.get("weight") or 0) > (best.get("weight") or 0):
            best = s
    return LastPerformance(weight=best.get("weight") or 0, reps=best.get("reps") or 0)


def _type_from_muscle(muscle: str) -> WorkoutType:
    muscle = muscle.lower()
    if "upper" in muscle:
        return "upper"
    if "lower" in muscle:
        return "lower"
    return "full"


def detect_workout_type(data: Any) -> WorkoutType:
    """Classify a type string, an exercise, or a history entry as upper/lower/full."""
    if isinstance(data, str):
        return _type_from_muscle(data)
    if isinstance(data, Exercise):
        return _type_from_muscle(data.primary_muscle)
    if isinstance(data, Mapping):
        if data.get("type"):
            return detect_workout_type(data["type"])
        if data.get("Primary Muscle"):
            return _type_from_muscle(str(data["Primary Muscle"]))
    return "full"

from __future__ import annotations

from typing import Optional

from workout_engine.models.session import OverloadSuggestion

SMALL_INCREMENT = 5
LARGE_INCREMENT = 10


def _fmt(weight: float) -> str:
    return f"{weight:g}"


def calculate_progressive_overload(
    current_weight: float | None,
    reps_completed: int | None,
    target_reps: int | None,
) -> Optional[OverloadSuggestion]:
    """Suggest the weight for the next set from how the last set went.

    Hitting the target exactly or beating it by one rep adds a small increment,
    beating it by two or more adds a large one, and falling short keeps the
    weight. Returns None when any input is missing or zero.
    """
    if not current_weight or not reps_completed or not target_reps:
        return None

    reps_exceeded = reps_completed - target_reps

    if reps_exceeded == 0:
        suggested = current_weight + SMALL_INCREMENT
        return OverloadSuggestion(
            suggested_weight=suggested,
            category="success",
            message=f"Great job! Try {_fmt(suggested)}lbs next set",
        )
    if reps_exceeded >= 2:
        suggested = current_weight + LARGE_INCREMENT
        return OverloadSuggestion(
            suggested_weight=suggested,
            category="excellent",
            message=f"Excellent! You exceeded target by {reps_exceeded} reps. Try {_fmt(suggested)}lbs next set",
        )
    if reps_exceeded == 1:
        suggested = current_weight + SMALL_INCREMENT
        return OverloadSuggestion(
            suggested_weight=suggested,
            category="good",
            message=f"Nice! Try {_fmt(suggested)}lbs next set",
        )
    return OverloadSuggestion(
        suggested_weight=current_weight,
        category="maintain",
        message=f"Keep going! Try {_fmt(current_weight)}lbs again to hit {target_reps} reps",
    )


def suggested_weight(current_weight: float | None, reps_completed: int | None, target_reps: int | None) -> Optional[float]:
    suggestion = calculate_progressive_overload(current_weight, reps_completed, target_reps)
    return suggestion.suggested_weight if suggestion else None


def meets_progressive_overload_criteria(reps_completed: int, target_reps: int) -> bool:
    return reps_completed >= target_reps

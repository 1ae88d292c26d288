from __future__ import annotations

import math
from typing import Any


def _to_float(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return 0.0
    return 0.0


def sanitize_weight(value: Any) -> float:
    """Weight from raw input; anything non-numeric or negative becomes 0."""
    weight = _to_float(value)
    if math.isnan(weight) or math.isinf(weight):
        return 0.0
    return max(0.0, weight)


def sanitize_reps(value: Any) -> int:
    """Whole reps from raw input; anything below 1 or non-numeric becomes 0."""
    reps = _to_float(value)
    if math.isnan(reps) or math.isinf(reps):
        return 0
    reps_int = int(reps)
    return reps_int if reps_int > 0 else 0

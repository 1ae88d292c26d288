from .sequence import build_sequence, rest_round_end_indices, swap_exercise, add_extra_set, drop_steps
from .overload import calculate_progressive_overload, suggested_weight, meets_progressive_overload_criteria
from .persist_rules import evaluate_target_updates, apply_target_updates, apply_persist_rules
from .history import exercise_progression, last_performance, detect_workout_type
from .export import to_csv, to_markdown, to_pdf

__all__ = [
    "build_sequence",
    "rest_round_end_indices",
    "swap_exercise",
    "add_extra_set",
    "drop_steps",
    "calculate_progressive_overload",
    "suggested_weight",
    "meets_progressive_overload_criteria",
    "evaluate_target_updates",
    "apply_target_updates",
    "apply_persist_rules",
    "exercise_progression",
    "last_performance",
    "detect_workout_type",
    "to_csv",
    "to_markdown",
    "to_pdf",
]

from .exercise import Exercise, WorkoutPlan
from .config import SessionConfig
from .session import (
    Phase,
    SuggestionCategory,
    SequenceStep,
    SetRecord,
    ExerciseTargets,
    TargetUpdate,
    OverloadSuggestion,
    LastPerformance,
    LoggedSet,
    ExerciseLog,
    SessionSummary,
)
from .snapshot import SessionSnapshot

__all__ = [
    "Exercise",
    "WorkoutPlan",
    "SessionConfig",
    "Phase",
    "SuggestionCategory",
    "SequenceStep",
    "SetRecord",
    "ExerciseTargets",
    "TargetUpdate",
    "OverloadSuggestion",
    "LastPerformance",
    "LoggedSet",
    "ExerciseLog",
    "SessionSummary",
    "SessionSnapshot",
]

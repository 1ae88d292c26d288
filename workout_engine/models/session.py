from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from .exercise import Exercise


Phase = Literal["warmup", "exercise", "cooldown", "complete"]

SuggestionCategory = Literal["success", "good", "excellent", "maintain"]


class SequenceStep(BaseModel):
    exercise: Exercise
    set_number: int = Field(..., ge=1)
    total_sets: int = Field(..., ge=1)
    group: int = Field(0, ge=0)

    model_config = {"frozen": True}


class SetRecord(BaseModel):
    exercise_name: str
    set_number: int = Field(..., ge=1)
    weight: float = Field(0.0, ge=0)
    reps: int = Field(0, ge=0)

    model_config = {"frozen": True}


class ExerciseTargets(BaseModel):
    weight: Optional[float] = None
    target_reps: Optional[int] = None


class TargetUpdate(BaseModel):
    """Writes decided for one exercise; a None field means leave it alone."""

    exercise_name: str
    target_weight: Optional[float] = None
    target_reps: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self.target_weight is None and self.target_reps is None


class OverloadSuggestion(BaseModel):
    suggested_weight: float
    category: SuggestionCategory
    message: str


class LastPerformance(BaseModel):
    weight: float = 0
    reps: int = 0


class LoggedSet(BaseModel):
    set: int
    weight: float
    reps: int


class ExerciseLog(BaseModel):
    sets: List[LoggedSet] = Field(default_factory=list)


class SessionSummary(BaseModel):
    """History entry produced when a session ends. Dump with by_alias=True for storage."""

    date: str
    workout_type: str = Field("unknown", alias="type")
    duration_seconds: int = Field(0, ge=0)
    per_exercise: Dict[str, ExerciseLog] = Field(default_factory=dict)
    warmup_completed: bool = False
    warmup_skipped: bool = False
    cooldown_completed: bool = False
    cooldown_skipped: bool = False
    is_partial: bool = False

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    @property
    def total_sets(self) -> int:
        return sum(len(log.sets) for log in self.per_exercise.values())

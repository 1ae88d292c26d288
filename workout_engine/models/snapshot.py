from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from .config import SessionConfig
from .exercise import Exercise
from .session import ExerciseTargets, Phase, SequenceStep, SessionSummary, SetRecord


class SessionSnapshot(BaseModel):
    """Resume state for a session. `summary` is set once history has been saved."""

    plan: List[Optional[Exercise]]
    config: SessionConfig
    sequence: List[SequenceStep]
    rest_indices: List[int] = Field(default_factory=list)
    phase: Phase
    current_step_index: int = Field(0, ge=0)
    records: List[SetRecord] = Field(default_factory=list)
    initial_targets: Dict[str, ExerciseTargets] = Field(default_factory=dict)
    updated_weights: Dict[str, float] = Field(default_factory=dict)
    overridden_exercises: List[str] = Field(default_factory=list)
    skipped_steps: List[Tuple[int, str, int]] = Field(default_factory=list)
    elapsed_seconds: int = Field(0, ge=0)
    rest_remaining_seconds: float = Field(0.0, ge=0)
    warmup_completed: bool = False
    warmup_skipped: bool = False
    cooldown_completed: bool = False
    cooldown_skipped: bool = False
    is_partial: bool = False
    summary: Optional[SessionSummary] = None

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence, Set, Tuple

from workout_engine.exceptions import SessionStateError
from workout_engine.models import (
    Exercise,
    ExerciseLog,
    ExerciseTargets,
    LastPerformance,
    LoggedSet,
    OverloadSuggestion,
    Phase,
    SequenceStep,
    SessionConfig,
    SessionSnapshot,
    SessionSummary,
    SetRecord,
    TargetUpdate,
)
from workout_engine.services.history import last_performance
from workout_engine.services.inputs import sanitize_reps, sanitize_weight
from workout_engine.services.overload import calculate_progressive_overload
from workout_engine.services.persist_rules import apply_persist_rules
from workout_engine.services.sequence import (
    add_extra_set,
    build_sequence,
    drop_steps,
    exercise_run_end,
    replace_remaining_steps,
    rest_round_end_indices,
    swap_exercise,
)
from workout_engine.storage.base import TargetStore
from .timers import Clock, ElapsedTimer, RestTimer

logger = logging.getLogger(__name__)


@dataclass
class SetResult:
    record: SetRecord
    start_rest: bool = False
    suggestion: Optional[OverloadSuggestion] = None
    exercises_done: bool = False
    target_updates: List[TargetUpdate] = field(default_factory=list)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionStateMachine:
    """Runs one workout session: warmup -> exercise -> cooldown -> complete.

    The driver calls start(), then the phase events and record_set() for each
    step. Storage is read once at start() and written when the exercise phase
    ends or on partial_complete(); storage failures are logged, never raised.
    """

    def __init__(
        self,
        plan: Sequence[Optional[Exercise]],
        store: TargetStore,
        config: SessionConfig | None = None,
        clock: Clock = time.monotonic,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.plan: List[Optional[Exercise]] = list(plan)
        self.store = store
        self.config = config or SessionConfig.from_settings()
        self._clock = clock
        self._now = now

        self.sequence: List[SequenceStep] = build_sequence(
            self.plan, self.config.supersets, self.config.sets_per_superset
        )
        self.rest_indices: Set[int] = rest_round_end_indices(
            self.plan, self.config.supersets, self.config.sets_per_superset
        )

        self.phase: Phase = "warmup"
        self.current_step_index = 0
        self.records: List[SetRecord] = []
        self.warmup_completed = False
        self.warmup_skipped = False
        self.cooldown_completed = False
        self.cooldown_skipped = False
        self.is_partial = False
        self.exited = False

        self.initial_targets: Dict[str, ExerciseTargets] = {}
        self.last_performance: Dict[str, LastPerformance] = {}
        self.updated_weights: Dict[str, float] = {}
        self.overridden_exercises: Set[str] = set()
        self.skipped_steps: Set[Tuple[int, str, int]] = set()

        self.elapsed_timer = ElapsedTimer(clock)
        self.rest_timer = RestTimer(self.config.rest_duration_seconds, clock)

        self._history: List[Dict[str, Any]] = []
        self._suggestion: Optional[OverloadSuggestion] = None
        self._suggestion_at: float = 0.0
        self._summary: Optional[SessionSummary] = None

    # ----- lifecycle -----

    def start(self) -> "SessionStateMachine":
        self._ensure_active()
        self._history = self._read_history()
        for name in self._exercise_names():
            self._load_exercise(name)
        self.elapsed_timer.start()
        logger.info("Session started: %d steps, %d rest points", len(self.sequence), len(self.rest_indices))
        if not self.config.show_warmup:
            self.warmup_skipped = True
            self._enter_exercise()
        return self

    def exit(self) -> None:
        """Abandon the session. Timers stop and captured sets are discarded."""
        self.elapsed_timer.stop()
        self.rest_timer.skip()
        self.records = []
        self._suggestion = None
        self.exited = True
        logger.info("Session exited in phase %s", self.phase)

    # ----- phase events -----

    def complete_warmup(self) -> None:
        self._require_phase("warmup")
        self.warmup_completed = True
        self._enter_exercise()

    def skip_warmup(self) -> None:
        self._require_phase("warmup")
        self.warmup_skipped = True
        self._enter_exercise()

    def complete_cooldown(self) -> None:
        self._require_phase("cooldown")
        self.cooldown_completed = True
        self._set_phase("complete")

    def skip_cooldown(self) -> None:
        self._require_phase("cooldown")
        self.cooldown_skipped = True
        self._set_phase("complete")

    # ----- exercise phase -----

    @property
    def current_step(self) -> Optional[SequenceStep]:
        if self.phase != "exercise" or self.current_step_index >= len(self.sequence):
            return None
        return self.sequence[self.current_step_index]

    def current_inputs(self) -> Tuple[Optional[float], Optional[int]]:
        """Prefilled (weight, reps) for the current step."""
        step = self.current_step
        if step is None:
            return None, None
        name = step.exercise.name
        targets = self.initial_targets.get(name) or ExerciseTargets()
        weight = self.updated_weights.get(name, targets.weight)
        return weight, targets.target_reps

    def record_set(self, weight: Any, reps: Any) -> SetResult:
        """Capture the current step and advance.

        Raw input is sanitized, never rejected. Finishing the last step runs the
        target persistence rules and leaves the exercise phase.
        """
        self._require_phase("exercise")
        step = self.current_step
        if step is None:
            raise SessionStateError("No step left to record")

        weight_val = sanitize_weight(weight)
        reps_val = sanitize_reps(reps)
        name = step.exercise.name
        targets = self.initial_targets.get(name) or ExerciseTargets()

        was_overridden = name in self.overridden_exercises
        expected = self.updated_weights.get(name, targets.weight)
        if expected is not None and weight_val != expected:
            self.overridden_exercises.add(name)
            self.updated_weights[name] = weight_val

        record = SetRecord(exercise_name=name, set_number=step.set_number, weight=weight_val, reps=reps_val)
        self.records.append(record)
        result = SetResult(record=record)

        if targets.target_reps and reps_val > 0 and not was_overridden:
            result.suggestion = calculate_progressive_overload(weight_val, reps_val, targets.target_reps)
            if result.suggestion:
                self._suggestion = result.suggestion
                self._suggestion_at = self._clock()

        completed_index = self.current_step_index
        self.current_step_index += 1

        if completed_index in self.rest_indices:
            result.start_rest = True
            if self.rest_timer.start():
                logger.debug("Rest started after step %d for %ss", completed_index, self.config.rest_duration_seconds)

        if self.current_step_index >= len(self.sequence):
            result.exercises_done = True
            result.target_updates = self._finish_exercises()
        return result

    def go_back(self) -> bool:
        """Undo the most recent set. A no-op at the first step."""
        self._require_phase("exercise")
        if self.current_step_index <= 0:
            return False
        self.current_step_index -= 1
        self.records.pop()
        if self.current_step_index in self.rest_indices:
            self.rest_timer.skip()
        self._suggestion = None
        return True

    def partial_complete(self) -> SessionSummary:
        """End early, keeping earned target updates for what was done so far."""
        self._ensure_active()
        if self.phase == "complete":
            raise SessionStateError("Session is already complete")
        if not self.records:
            raise SessionStateError("Nothing recorded yet; cannot save a partial workout")
        apply_persist_rules(self.store, self.records, self.initial_targets)
        self.is_partial = True
        self._set_phase("complete")
        return self.finalize()

    # ----- mid-session edits -----

    def swap_exercise(self, old_name: str, new_exercise: Exercise) -> None:
        """Replace an exercise for the rest of the session. Completed steps keep their exercise."""
        self._require_phase("warmup", "exercise")
        self.plan = swap_exercise(self.plan, old_name, new_exercise)
        self.skipped_steps = {
            (g, new_exercise.name if n == old_name else n, s) for g, n, s in self.skipped_steps
        }
        self._rebuild_remaining()
        if new_exercise.name not in self.initial_targets:
            self._load_exercise(new_exercise.name)
        logger.info("Swapped %s for %s", old_name, new_exercise.name)

    def add_extra_set(self) -> None:
        """Give the current step's group one more round."""
        self._ensure_active()
        step = self.current_step
        if step is None:
            raise SessionStateError("No current exercise to add a set to")
        self.plan = add_extra_set(self.plan, self.config.supersets, self.config.sets_per_superset, step.group)
        self._rebuild_remaining()

    def skip_exercise(self) -> List[TargetUpdate]:
        """Drop the remaining consecutive sets of the current exercise.

        Finishes the exercise phase when nothing is left, returning the target
        updates that were applied.
        """
        self._require_phase("exercise")
        step = self.current_step
        if step is None:
            raise SessionStateError("No current exercise to skip")
        start = self.current_step_index
        end = exercise_run_end(self.sequence, start)
        self.skipped_steps.update((s.group, s.exercise.name, s.set_number) for s in self.sequence[start:end])
        self.sequence, self.rest_indices = drop_steps(self.sequence, self.rest_indices, range(start, end))
        logger.info("Skipped %d remaining sets of %s", end - start, step.exercise.name)
        if self.current_step_index >= len(self.sequence):
            return self._finish_exercises()
        return []

    def edit_targets(self, exercise_name: str, weight: float | None = None, target_reps: int | None = None) -> None:
        """Manual target edit: written through to storage and used for the rest of the session."""
        self._ensure_active()
        current = self.initial_targets.get(exercise_name) or ExerciseTargets()
        update: Dict[str, Any] = {}
        if weight is not None:
            update["weight"] = sanitize_weight(weight)
            self._write(self.store.set_target_weight, exercise_name, update["weight"])
            self.updated_weights.pop(exercise_name, None)
        if target_reps is not None:
            update["target_reps"] = sanitize_reps(target_reps)
            self._write(self.store.set_target_reps, exercise_name, update["target_reps"])
        self.initial_targets[exercise_name] = current.model_copy(update=update)

    # ----- rest & timing -----

    @property
    def is_resting(self) -> bool:
        return self.rest_timer.is_resting

    def skip_rest(self) -> None:
        self.rest_timer.skip()

    @property
    def elapsed_seconds(self) -> int:
        return self.elapsed_timer.elapsed_seconds

    @property
    def active_suggestion(self) -> Optional[OverloadSuggestion]:
        """Latest suggestion while it is still inside its display window."""
        if self._suggestion is None:
            return None
        if self._clock() - self._suggestion_at > self.config.suggestion_display_seconds:
            return None
        return self._suggestion

    # ----- completion -----

    def finalize(self, save_history: bool = True) -> SessionSummary:
        """Build the history entry for a finished session; appended to storage once."""
        self._ensure_active()
        self._require_phase("complete")
        if self._summary is not None:
            return self._summary
        self.elapsed_timer.stop()
        self.rest_timer.skip()

        per_exercise: Dict[str, ExerciseLog] = {}
        for rec in self.records:
            per_exercise.setdefault(rec.exercise_name, ExerciseLog()).sets.append(
                LoggedSet(set=rec.set_number, weight=rec.weight, reps=rec.reps)
            )
        first = next((ex for ex in self.plan if ex is not None), None)
        self._summary = SessionSummary(
            date=self._now().isoformat(),
            workout_type=(first.primary_muscle if first else "") or "unknown",
            duration_seconds=self.elapsed_seconds,
            per_exercise=per_exercise,
            warmup_completed=self.warmup_completed,
            warmup_skipped=self.warmup_skipped,
            cooldown_completed=self.cooldown_completed,
            cooldown_skipped=self.cooldown_skipped,
            is_partial=self.is_partial,
        )
        if save_history:
            try:
                self.store.append_history(self._summary.model_dump(by_alias=True))
            except Exception as e:
                logger.warning("Could not save workout history: %s", e)
        return self._summary

    # ----- resume -----

    def snapshot(self) -> SessionSnapshot:
        self._ensure_active()
        return SessionSnapshot(
            plan=self.plan,
            config=self.config,
            sequence=self.sequence,
            rest_indices=sorted(self.rest_indices),
            phase=self.phase,
            current_step_index=self.current_step_index,
            records=self.records,
            initial_targets=self.initial_targets,
            updated_weights=self.updated_weights,
            overridden_exercises=sorted(self.overridden_exercises),
            skipped_steps=sorted(self.skipped_steps),
            elapsed_seconds=self.elapsed_seconds,
            rest_remaining_seconds=self.rest_timer.remaining_seconds,
            warmup_completed=self.warmup_completed,
            warmup_skipped=self.warmup_skipped,
            cooldown_completed=self.cooldown_completed,
            cooldown_skipped=self.cooldown_skipped,
            is_partial=self.is_partial,
            summary=self._summary,
        )

    @classmethod
    def restore(
        cls,
        snapshot: SessionSnapshot,
        store: TargetStore,
        clock: Clock = time.monotonic,
        now: Callable[[], datetime] = _utcnow,
    ) -> "SessionStateMachine":
        """Rebuild a running session from a snapshot. Targets come from the snapshot, not storage."""
        engine = cls(snapshot.plan, store, snapshot.config, clock=clock, now=now)
        engine.sequence = list(snapshot.sequence)
        engine.rest_indices = set(snapshot.rest_indices)
        engine.phase = snapshot.phase
        engine.current_step_index = snapshot.current_step_index
        engine.records = list(snapshot.records)
        engine.initial_targets = dict(snapshot.initial_targets)
        engine.updated_weights = dict(snapshot.updated_weights)
        engine.overridden_exercises = set(snapshot.overridden_exercises)
        engine.warmup_completed = snapshot.warmup_completed
        engine.warmup_skipped = snapshot.warmup_skipped
        engine.cooldown_completed = snapshot.cooldown_completed
        engine.cooldown_skipped = snapshot.cooldown_skipped
        engine.is_partial = snapshot.is_partial
        engine.skipped_steps = {tuple(key) for key in snapshot.skipped_steps}
        engine._summary = snapshot.summary
        engine._history = engine._read_history()
        for name in engine.initial_targets:
            perf = last_performance(engine._history, name)
            if perf:
                engine.last_performance[name] = perf
        engine.elapsed_timer = ElapsedTimer(clock, offset_seconds=snapshot.elapsed_seconds)
        engine.elapsed_timer.start()
        engine.rest_timer.resume(snapshot.rest_remaining_seconds)
        return engine

    # ----- internals -----

    def _ensure_active(self) -> None:
        if self.exited:
            raise SessionStateError("Session has been exited")

    def _require_phase(self, *phases: Phase) -> None:
        self._ensure_active()
        if self.phase not in phases:
            raise SessionStateError(f"Not allowed in phase '{self.phase}' (expected {', '.join(phases)})")

    def _set_phase(self, phase: Phase) -> None:
        logger.info("Phase %s -> %s", self.phase, phase)
        self.phase = phase

    def _enter_exercise(self) -> None:
        self._set_phase("exercise")
        self.current_step_index = 0
        if not self.sequence:
            self._finish_exercises()

    def _finish_exercises(self) -> List[TargetUpdate]:
        updates = apply_persist_rules(self.store, self.records, self.initial_targets)
        if self.config.show_cooldown:
            self._set_phase("cooldown")
        else:
            self.cooldown_skipped = True
            self._set_phase("complete")
        return updates

    def _rebuild_remaining(self) -> None:
        rebuilt = build_sequence(self.plan, self.config.supersets, self.config.sets_per_superset)
        rest = rest_round_end_indices(self.plan, self.config.supersets, self.config.sets_per_superset)
        # Skipped steps stay out of the rebuilt sequence.
        dropped = [
            i for i, s in enumerate(rebuilt) if (s.group, s.exercise.name, s.set_number) in self.skipped_steps
        ]
        rebuilt, self.rest_indices = drop_steps(rebuilt, rest, set(dropped))
        start = self.current_step_index if self.phase == "exercise" else 0
        self.sequence = replace_remaining_steps(self.sequence, rebuilt, start)

    def _exercise_names(self) -> List[str]:
        names: List[str] = []
        for ex in self.plan:
            if ex is not None and ex.name not in names:
                names.append(ex.name)
        return names

    def _load_exercise(self, name: str) -> None:
        weight = self._read(self.store.get_target_weight, name)
        reps = self._read(self.store.get_target_reps, name)
        self.initial_targets[name] = ExerciseTargets(weight=weight, target_reps=reps)
        perf = last_performance(self._history, name)
        if perf:
            self.last_performance[name] = perf

    def _read(self, getter: Callable[[str], Any], name: str) -> Any:
        try:
            return getter(name)
        except Exception as e:
            logger.warning("Could not read stored target for %s: %s", name, e)
            return None

    def _write(self, setter: Callable[[str, Any], None], name: str, value: Any) -> None:
        try:
            setter(name, value)
        except Exception as e:
            logger.warning("Could not save target for %s: %s", name, e)

    def _read_history(self) -> List[Dict[str, Any]]:
        try:
            return list(self.store.get_history() or [])
        except Exception as e:
            logger.warning("Could not read workout history: %s", e)
            return []

from __future__ import annotations

import logging
import math
from typing import Dict, List, Mapping, Sequence

from workout_engine.models.session import ExerciseTargets, SetRecord, TargetUpdate
from workout_engine.storage.base import TargetStore

logger = logging.getLogger(__name__)


def group_records(records: Sequence[SetRecord]) -> Dict[str, List[SetRecord]]:
    """Group set records by exercise name, keeping capture order."""
    grouped: Dict[str, List[SetRecord]] = {}
    for rec in records:
        grouped.setdefault(rec.exercise_name, []).append(rec)
    return grouped


def _valid_number(value: float) -> bool:
    return isinstance(value, (int, float)) and not math.isnan(value)


def evaluate_target_updates(
    records: Sequence[SetRecord],
    initial_targets: Mapping[str, ExerciseTargets],
) -> List[TargetUpdate]:
    """Decide which stored targets a session has earned.

    Rules, per exercise:
    - Target reps become min(reps) only if every set beat the current target.
    - Target weight becomes the last set's weight only if every set met the
      current target and that weight differs from the stored one.
    A missing target reps counts as 0. Exercises are judged independently.
    """
    updates: List[TargetUpdate] = []
    for name, sets in group_records(records).items():
        initial = initial_targets.get(name) or ExerciseTargets()
        current_target_reps = initial.target_reps or 0

        all_reps = [s.reps for s in sets if _valid_number(s.reps)]
        if not all_reps:
            continue

        min_reps = min(all_reps)
        all_met = all(r >= current_target_reps for r in all_reps)
        all_exceeded = all(r > current_target_reps for r in all_reps)

        update = TargetUpdate(exercise_name=name)
        if all_exceeded and min_reps > 0:
            update.target_reps = min_reps
        if all_met:
            latest_weight = sets[-1].weight
            if _valid_number(latest_weight) and latest_weight >= 0 and latest_weight != initial.weight:
                update.target_weight = latest_weight
        if not update.is_empty:
            updates.append(update)
    return updates


def apply_target_updates(store: TargetStore, updates: Sequence[TargetUpdate]) -> List[TargetUpdate]:
    """Write decided updates one at a time. Failed writes are logged and skipped.

    Returns the updates whose writes all succeeded.
    """
    applied: List[TargetUpdate] = []
    for update in updates:
        ok = True
        if update.target_reps is not None:
            try:
                store.set_target_reps(update.exercise_name, update.target_reps)
            except Exception as e:
                ok = False
                logger.warning("Could not save target reps for %s: %s", update.exercise_name, e)
        if update.target_weight is not None:
            try:
                store.set_target_weight(update.exercise_name, update.target_weight)
            except Exception as e:
                ok = False
                logger.warning("Could not save target weight for %s: %s", update.exercise_name, e)
        if ok:
            logger.info(
                "Updated targets for %s (weight=%s, reps=%s)",
                update.exercise_name, update.target_weight, update.target_reps,
            )
            applied.append(update)
    return applied


def apply_persist_rules(
    store: TargetStore,
    records: Sequence[SetRecord],
    initial_targets: Mapping[str, ExerciseTargets],
) -> List[TargetUpdate]:
    return apply_target_updates(store, evaluate_target_updates(records, initial_targets))

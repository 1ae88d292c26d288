from __future__ import annotations

import logging
from typing import List, Optional

from workout_engine.exceptions import StorageError
from workout_engine.models import ExerciseTargets, SetRecord
from workout_engine.services.persist_rules import (
    apply_persist_rules,
    evaluate_target_updates,
    group_records,
)
from workout_engine.storage import InMemoryStore


def records(name: str, sets: List[tuple]) -> List[SetRecord]:
    return [SetRecord(exercise_name=name, set_number=i + 1, weight=w, reps=r) for i, (w, r) in enumerate(sets)]


def test_group_records_keeps_capture_order() -> None:
    recs = records("A", [(10, 5)]) + records("B", [(20, 5)]) + records("A", [(15, 6)])
    grouped = group_records(recs)
    assert list(grouped) == ["A", "B"]
    assert [r.weight for r in grouped["A"]] == [10, 15]


def test_all_sets_exceeded_updates_reps_and_weight() -> None:
    targets = {"Bench": ExerciseTargets(weight=100, target_reps=8)}
    updates = evaluate_target_updates(records("Bench", [(100, 10), (105, 9), (105, 10)]), targets)
    assert len(updates) == 1
    assert updates[0].target_reps == 9
    assert updates[0].target_weight == 105


def test_met_but_not_exceeded_updates_weight_only_when_changed() -> None:
    targets = {"Bench": ExerciseTargets(weight=100, target_reps=8)}
    assert evaluate_target_updates(records("Bench", [(100, 8), (100, 8)]), targets) == []
    updates = evaluate_target_updates(records("Bench", [(100, 8), (110, 8)]), targets)
    assert updates[0].target_weight == 110
    assert updates[0].target_reps is None


def test_one_short_set_blocks_only_that_exercise() -> None:
    targets = {
        "Bench": ExerciseTargets(weight=100, target_reps=8),
        "Row": ExerciseTargets(weight=80, target_reps=10),
    }
    recs = records("Bench", [(120, 9), (120, 7)]) + records("Row", [(85, 11), (85, 12)])
    updates = evaluate_target_updates(recs, targets)
    assert [u.exercise_name for u in updates] == ["Row"]
    assert updates[0].target_reps == 11 and updates[0].target_weight == 85


def test_missing_targets_count_as_zero() -> None:
    updates = evaluate_target_updates(records("New", [(50, 6), (55, 5)]), {})
    assert updates[0].target_reps == 5
    assert updates[0].target_weight == 55


def test_zero_reps_never_become_target() -> None:
    updates = evaluate_target_updates(records("New", [(0, 0)]), {})
    # 0 > 0 fails so reps stay; 0 >= 0 holds and 0 differs from unset weight.
    assert updates[0].target_reps is None
    assert updates[0].target_weight == 0


def test_rules_are_idempotent() -> None:
    store = InMemoryStore(weights={"Bench": 100}, target_reps={"Bench": 8})
    targets = {"Bench": ExerciseTargets(weight=100, target_reps=8)}
    recs = records("Bench", [(105, 9), (105, 10)])
    first = apply_persist_rules(store, recs, targets)
    state = (dict(store.weights), dict(store.target_reps))
    second = apply_persist_rules(store, recs, targets)
    assert first == second
    assert (store.weights, store.target_reps) == state
    assert store.target_reps["Bench"] == 9 and store.weights["Bench"] == 105


class FailingStore(InMemoryStore):
    def set_target_weight(self, exercise_name: str, weight: Optional[float]) -> None:
        raise StorageError("disk full", key=exercise_name)


def test_write_failures_are_logged_not_raised(caplog) -> None:
    store = FailingStore()
    with caplog.at_level(logging.WARNING):
        applied = apply_persist_rules(store, records("Bench", [(100, 9)]), {})
    assert applied == []
    assert store.target_reps["Bench"] == 9, "Reps write should still happen"
    assert "Could not save target weight for Bench" in caplog.text

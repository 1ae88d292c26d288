from __future__ import annotations

from typing import Collection, List, Optional, Sequence, Set, Tuple

from workout_engine.models.exercise import Exercise
from workout_engine.models.session import SequenceStep

FALLBACK_SETS = 3


def _group_plan(plan: Sequence[Optional[Exercise]], supersets: Sequence[int]) -> List[Tuple[int, List[Exercise]]]:
    """Partition the plan by superset sizes into (config position, exercises) pairs.

    Each size consumes that many plan slots (placeholders included) and keeps the
    real exercises. Groups left empty are dropped; plan entries past the last
    configured group are not scheduled.
    """
    groups: List[Tuple[int, List[Exercise]]] = []
    cursor = 0
    for position, size in enumerate(supersets):
        group: List[Exercise] = []
        for _ in range(size):
            if cursor >= len(plan):
                break
            if plan[cursor] is not None:
                group.append(plan[cursor])  # type: ignore[arg-type]
            cursor += 1
        if group:
            groups.append((position, group))
    return groups


def _group_max_sets(group: Sequence[Exercise], sets_per_superset: int) -> int:
    return max((ex.sets or sets_per_superset or FALLBACK_SETS) for ex in group)


def build_sequence(
    plan: Sequence[Optional[Exercise]],
    supersets: Sequence[int],
    sets_per_superset: int,
) -> List[SequenceStep]:
    """Expand a plan into ordered (exercise, set) steps, one round of the group per set."""
    sequence: List[SequenceStep] = []
    for position, group in _group_plan(plan, supersets):
        max_sets = _group_max_sets(group, sets_per_superset)
        for set_number in range(1, max_sets + 1):
            for ex in group:
                sequence.append(
                    SequenceStep(exercise=ex, set_number=set_number, total_sets=max_sets, group=position)
                )
    return sequence


def rest_round_end_indices(
    plan: Sequence[Optional[Exercise]],
    supersets: Sequence[int],
    sets_per_superset: int,
) -> Set[int]:
    """Step indices after which a rest period starts.

    Grouped supersets rest once, after their final round, unless they are the
    last group. Single-exercise groups rest after every set except the very
    last step of the workout.
    """
    groups = _group_plan(plan, supersets)
    indices: Set[int] = set()
    position = 0
    for g, (_, group) in enumerate(groups):
        max_sets = _group_max_sets(group, sets_per_superset)
        is_last_group = g == len(groups) - 1
        if len(group) > 1:
            position += max_sets * len(group)
            if not is_last_group:
                indices.add(position - 1)
            continue
        for set_number in range(1, max_sets + 1):
            if not (is_last_group and set_number == max_sets):
                indices.add(position)
            position += 1
    return indices


def swap_exercise(
    plan: Sequence[Optional[Exercise]],
    old_name: str,
    new_exercise: Exercise,
) -> List[Optional[Exercise]]:
    """Return a new plan with every slot named old_name replaced.

    The replacement keeps the replaced slot's set count so the group layout,
    and therefore step indices, stay the same.
    """
    out: List[Optional[Exercise]] = []
    for ex in plan:
        if ex is not None and ex.name == old_name:
            out.append(new_exercise.model_copy(update={"sets": ex.sets}))
        else:
            out.append(ex)
    return out


def add_extra_set(
    plan: Sequence[Optional[Exercise]],
    supersets: Sequence[int],
    sets_per_superset: int,
    group: int,
) -> List[Optional[Exercise]]:
    """Return a new plan in which the superset at config position `group` runs one more round.

    Every exercise in the group is raised to the group's current round count
    plus one. An unknown or empty group leaves the plan as it is.
    """
    out = list(plan)
    if not 0 <= group < len(supersets):
        return out
    start = sum(supersets[:group])
    slots = range(start, min(start + supersets[group], len(out)))
    members = [out[i] for i in slots if out[i] is not None]
    if not members:
        return out
    target = _group_max_sets(members, sets_per_superset) + 1  # type: ignore[arg-type]
    for i in slots:
        ex = out[i]
        if ex is not None:
            out[i] = ex.model_copy(update={"sets": target})
    return out


def exercise_run_end(sequence: Sequence[SequenceStep], index: int) -> int:
    """First index after the consecutive steps of the exercise at `index`."""
    if not 0 <= index < len(sequence):
        return index
    step = sequence[index]
    end = index + 1
    while end < len(sequence) and sequence[end].exercise.name == step.exercise.name and sequence[end].group == step.group:
        end += 1
    return end


def drop_steps(
    sequence: Sequence[SequenceStep],
    rest_indices: Collection[int],
    drop: Collection[int],
) -> Tuple[List[SequenceStep], Set[int]]:
    """Remove the steps at `drop` and shift the rest points after them.

    A rest point on a removed step goes with it.
    """
    kept: List[SequenceStep] = []
    rest: Set[int] = set()
    for i, step in enumerate(sequence):
        if i in drop:
            continue
        if i in rest_indices:
            rest.add(len(kept))
        kept.append(step)
    return kept, rest


def replace_remaining_steps(
    sequence: Sequence[SequenceStep],
    rebuilt: Sequence[SequenceStep],
    from_index: int,
) -> List[SequenceStep]:
    """Keep steps already completed and take everything from from_index on from rebuilt."""
    return list(sequence[:from_index]) + list(rebuilt[from_index:])

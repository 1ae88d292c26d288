from __future__ import annotations

from conftest import make_exercise, make_plan

from workout_engine.services.sequence import (
    add_extra_set,
    build_sequence,
    drop_steps,
    exercise_run_end,
    replace_remaining_steps,
    rest_round_end_indices,
    swap_exercise,
)


def test_sequence_length_for_four_supersets() -> None:
    seq = build_sequence(make_plan(8), [2, 2, 2, 2], 3)
    assert len(seq) == 24, f"Expected 24 steps, got {len(seq)}"
    assert [(s.exercise.name, s.set_number) for s in seq[:4]] == [
        ("Exercise 1", 1),
        ("Exercise 2", 1),
        ("Exercise 1", 2),
        ("Exercise 2", 2),
    ]
    assert all(s.total_sets == 3 for s in seq)


def test_group_uses_max_sets_of_its_exercises() -> None:
    plan = [make_exercise("A", sets=2), make_exercise("B", sets=4), make_exercise("C")]
    seq = build_sequence(plan, [2, 1], 3)
    assert len(seq) == 4 * 2 + 3
    assert {s.total_sets for s in seq[:8]} == {4}
    assert [s.set_number for s in seq[8:]] == [1, 2, 3]


def test_placeholders_consume_slots_and_empty_groups_are_skipped() -> None:
    plan = [make_exercise("A"), None, None, make_exercise("B")]
    seq = build_sequence(plan, [1, 2, 1], 2)
    assert [s.exercise.name for s in seq] == ["A", "A", "B", "B"]


def test_config_longer_than_plan_truncates() -> None:
    seq = build_sequence(make_plan(3), [2, 2, 2], 3)
    assert len(seq) == 3 * 2 + 3 * 1


def test_plan_entries_past_config_are_not_scheduled() -> None:
    seq = build_sequence(make_plan(3), [1], 2)
    assert {s.exercise.name for s in seq} == {"Exercise 1"}


def test_zero_default_sets_falls_back_to_three() -> None:
    seq = build_sequence(make_plan(1), [1], 0)
    assert len(seq) == 3


def test_build_is_deterministic() -> None:
    plan = make_plan(5)
    assert build_sequence(plan, [2, 1, 2], 3) == build_sequence(plan, [2, 1, 2], 3)


def test_rest_points_for_mixed_groups() -> None:
    indices = rest_round_end_indices(make_plan(4), [1, 2, 1], 3)
    # single: 0,1,2 | pair: 3..8, rest only after 8 | final single: 9,10 (11 is the last step)
    assert indices == {0, 1, 2, 8, 9, 10}
    assert not indices & {3, 4, 5, 6, 7}, "No rest inside a superset"


def test_rest_points_for_pairs_skip_last_group() -> None:
    assert rest_round_end_indices(make_plan(4), [2, 2], 3) == {5}
    assert rest_round_end_indices(make_plan(2), [2], 3) == set()


def test_rest_points_single_exercise_workout() -> None:
    assert rest_round_end_indices(make_plan(1), [1], 3) == {0, 1}


def test_rest_points_ignore_empty_trailing_groups() -> None:
    # The [2] group is the last real group even though config asks for more.
    assert rest_round_end_indices(make_plan(3), [1, 2, 2], 2) == {0, 1}


def test_swap_keeps_slot_set_count() -> None:
    plan = [make_exercise("A", sets=4), make_exercise("B")]
    swapped = swap_exercise(plan, "A", make_exercise("D", sets=1))
    assert swapped[0] is not None and swapped[0].name == "D" and swapped[0].sets == 4
    assert plan[0].name == "A", "Original plan must not change"
    assert build_sequence(swapped, [2], 3) != build_sequence(plan, [2], 3)
    assert len(build_sequence(swapped, [2], 3)) == len(build_sequence(plan, [2], 3))


def test_add_extra_set_adds_a_round_to_the_group() -> None:
    plan = make_plan(3)
    bigger = add_extra_set(plan, [2, 1], 3, 0)
    assert bigger[1] is not None and bigger[1].sets == 4
    assert len(build_sequence(bigger, [2, 1], 3)) == len(build_sequence(plan, [2, 1], 3)) + 2
    assert plan[1] is not None and plan[1].sets is None


def test_replace_remaining_steps_keeps_prefix() -> None:
    old = build_sequence(make_plan(2), [2], 2)
    new = build_sequence(swap_exercise(make_plan(2), "Exercise 1", make_exercise("Z")), [2], 2)
    merged = replace_remaining_steps(old, new, 1)
    assert [s.exercise.name for s in merged] == ["Exercise 1", "Exercise 2", "Z", "Exercise 2"]


def test_add_extra_set_uses_group_position_not_name() -> None:
    plan = [make_exercise("A"), make_exercise("B"), make_exercise("A")]
    bigger = add_extra_set(plan, [2, 1], 3, 1)
    assert bigger[2] is not None and bigger[2].sets == 4
    assert bigger[0] is not None and bigger[0].sets is None
    assert add_extra_set(plan, [2, 1], 3, 5) == plan


def test_steps_carry_their_group_position() -> None:
    plan = [make_exercise("A"), None, None, make_exercise("B")]
    seq = build_sequence(plan, [1, 2, 1], 1)
    assert [s.group for s in seq] == [0, 2]


def test_exercise_run_end_stops_at_next_exercise() -> None:
    seq = build_sequence(make_plan(2), [1, 2], 2)
    assert exercise_run_end(seq, 0) == 2
    assert exercise_run_end(seq, 1) == 2
    assert exercise_run_end(build_sequence(make_plan(2), [2], 2), 0) == 1


def test_drop_steps_shifts_rest_points() -> None:
    seq = build_sequence(make_plan(2), [1, 1], 3)
    rest = rest_round_end_indices(make_plan(2), [1, 1], 3)
    kept, new_rest = drop_steps(seq, rest, {1, 2})
    assert [(s.exercise.name, s.set_number) for s in kept] == [
        ("Exercise 1", 1),
        ("Exercise 2", 1),
        ("Exercise 2", 2),
        ("Exercise 2", 3),
    ]
    assert new_rest == {0, 1, 2}

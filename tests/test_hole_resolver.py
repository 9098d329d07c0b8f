from __future__ import annotations

import pytest
from pydantic import ValidationError

from vegas.scoring.engine import (
    compute_applied_multiplier,
    flipped_team_score,
    raw_team_score,
    resolve_hole,
)
from vegas.scoring.models import InvalidHoleInput, ScoreInput

TEAM_A = ("p1", "p2")
TEAM_B = ("p3", "p4")


def _scores(
    s1: int,
    s2: int,
    s3: int,
    s4: int,
    *,
    birdies: tuple[str, ...] = (),
    pushes: dict[str, int] | None = None,
) -> dict[str, ScoreInput]:
    pushes = pushes or {}
    strokes = {"p1": s1, "p2": s2, "p3": s3, "p4": s4}
    return {
        pid: ScoreInput(
            strokes=value, is_birdie=pid in birdies, push_count=pushes.get(pid, 0)
        )
        for pid, value in strokes.items()
    }


def _resolve(scores, carry: int = 1, hole: int = 1):
    return resolve_hole(hole, 4, scores, TEAM_A, TEAM_B, carry)


def test_basic_win_without_birdie_or_push():
    result = _resolve(_scores(4, 5, 5, 6))

    assert result.team_a_score == 45
    assert result.team_b_score == 56
    assert result.diff == 11
    assert result.applied_multiplier == 1
    assert result.points_result == {"p1": 11, "p2": 11, "p3": -11, "p4": -11}
    assert result.is_draw is False
    assert result.next_hole_multiplier == 1
    assert result.winning_team == TEAM_A


def test_birdie_flips_the_opposing_team():
    result = _resolve(_scores(3, 5, 4, 6, birdies=("p1",)))

    assert result.team_a_score == 35
    assert result.team_b_score == 64
    assert result.applied_multiplier == 2
    assert result.points_result["p1"] == 58
    assert result.points_result["p2"] == 58
    assert result.points_result["p3"] == -58
    assert result.points_result["p4"] == -58


def test_both_teams_birdie_both_flip_and_bonus_counts_once():
    result = _resolve(_scores(3, 5, 3, 6, birdies=("p1", "p3")))

    assert result.team_a_score == 53
    assert result.team_b_score == 63
    assert result.diff == 10
    assert result.applied_multiplier == 2
    assert result.points_result["p1"] == 20
    assert result.points_result["p4"] == -20


def test_single_push_doubles_the_hole():
    result = _resolve(_scores(4, 5, 5, 6, pushes={"p3": 1}))

    assert result.applied_multiplier == 2
    assert result.points_result["p1"] == 22
    assert result.points_result["p3"] == -22


def test_two_pushes_quadruple_the_hole():
    result = _resolve(_scores(4, 5, 5, 6, pushes={"p1": 1, "p2": 1}))

    assert result.applied_multiplier == 4
    assert result.points_result["p1"] == 44


def test_stacked_push_units_from_one_player_count_individually():
    result = _resolve(_scores(4, 5, 5, 6, pushes={"p4": 2}))

    assert result.applied_multiplier == 4


def test_carry_over_from_one_draw_doubles_the_hole():
    result = _resolve(_scores(4, 5, 5, 6), carry=2)

    assert result.carry_over_multiplier_in == 2
    assert result.applied_multiplier == 2
    assert result.points_result["p1"] == 22
    assert result.next_hole_multiplier == 1


def test_carry_over_push_and_birdie_combine():
    result = _resolve(_scores(3, 5, 4, 6, birdies=("p1",), pushes={"p1": 1}), carry=2)

    assert result.applied_multiplier == 6
    assert result.points_result["p1"] == 174


def test_exact_tie_is_a_draw_and_escalates_carry_over():
    result = _resolve(_scores(4, 5, 4, 5), carry=3)

    assert result.is_draw is True
    assert result.diff == 0
    assert set(result.points_result.values()) == {0}
    assert result.next_hole_multiplier == 4
    assert result.winning_team is None


def test_team_b_can_win():
    result = _resolve(_scores(6, 7, 4, 4))

    assert result.team_a_score == 67
    assert result.team_b_score == 44
    assert result.points_result == {"p1": -23, "p2": -23, "p3": 23, "p4": 23}
    assert result.winning_team == TEAM_B


@pytest.mark.parametrize(
    "strokes,birdies,pushes,carry",
    [
        ((4, 5, 5, 6), (), {}, 1),
        ((3, 8, 4, 4), ("p1",), {"p2": 1}, 1),
        ((2, 3, 3, 9), ("p1", "p2", "p3"), {"p3": 2, "p4": 1}, 4),
        ((7, 7, 6, 8), (), {}, 5),
        ((5, 5, 5, 5), (), {"p1": 1}, 2),
    ],
)
def test_points_are_zero_sum(strokes, birdies, pushes, carry):
    result = _resolve(_scores(*strokes, birdies=birdies, pushes=pushes), carry=carry)

    assert sum(result.points_result.values()) == 0
    assert set(result.points_result) == {"p1", "p2", "p3", "p4"}


def test_resolution_is_deterministic():
    scores = _scores(3, 5, 4, 6, birdies=("p1",), pushes={"p2": 1})

    first = _resolve(scores, carry=2)
    second = _resolve(scores, carry=2)

    assert first == second
    assert first.model_dump() == second.model_dump()


def test_multiplier_floor_is_one():
    assert compute_applied_multiplier(1, 0, False) == 1
    result = _resolve(_scores(4, 5, 5, 6))
    assert result.applied_multiplier == 1
    assert result.next_hole_multiplier == 1


@pytest.mark.parametrize("start,draws", [(1, 1), (1, 3), (2, 2), (4, 5)])
def test_consecutive_draws_escalate_carry_over(start, draws):
    carry = start
    for hole in range(1, draws + 1):
        result = _resolve(_scores(4, 5, 4, 5), carry=carry, hole=hole)
        assert result.is_draw
        carry = result.next_hole_multiplier

    assert carry == start + draws

    decider = _resolve(_scores(4, 5, 5, 6), carry=carry, hole=draws + 1)
    assert decider.applied_multiplier == 2 * (start + draws - 1)


def test_team_score_helpers():
    assert raw_team_score(6, 4) == (46, 4, 6)
    assert flipped_team_score(4, 6) == 64
    assert flipped_team_score(5, 5) == 55


def test_score_input_derives_birdie_from_par():
    assert ScoreInput.from_strokes(3, 4).is_birdie is True
    assert ScoreInput.from_strokes(4, 4).is_birdie is False
    assert ScoreInput.from_strokes(5, 4, push_count=1).push_count == 1


def test_score_input_accepts_camel_case_payload():
    score = ScoreInput.model_validate({"score": 4, "isBirdie": True, "pushCount": 2})

    assert score.strokes == 4
    assert score.is_birdie is True
    assert score.push_count == 2
    assert score.model_dump(by_alias=True) == {
        "strokes": 4,
        "isBirdie": True,
        "pushCount": 2,
    }


@pytest.mark.parametrize("strokes", [0, -1])
def test_non_positive_strokes_are_rejected(strokes):
    with pytest.raises(ValidationError):
        ScoreInput(strokes=strokes)


def test_negative_push_count_is_rejected():
    with pytest.raises(ValidationError):
        ScoreInput(strokes=4, push_count=-1)


def test_missing_player_is_rejected():
    scores = _scores(4, 5, 5, 6)
    del scores["p4"]

    with pytest.raises(InvalidHoleInput):
        _resolve(scores)


def test_extra_player_is_rejected():
    scores = _scores(4, 5, 5, 6)
    scores["p5"] = ScoreInput(strokes=4)

    with pytest.raises(InvalidHoleInput):
        _resolve(scores)


def test_overlapping_teams_are_rejected():
    with pytest.raises(InvalidHoleInput):
        resolve_hole(1, 4, _scores(4, 5, 5, 6), ("p1", "p2"), ("p2", "p3"))


def test_team_with_duplicate_player_is_rejected():
    with pytest.raises(InvalidHoleInput):
        resolve_hole(1, 4, _scores(4, 5, 5, 6), ("p1", "p1"), ("p3", "p4"))


def test_team_of_three_is_rejected():
    with pytest.raises(InvalidHoleInput):
        resolve_hole(1, 4, _scores(4, 5, 5, 6), ("p1", "p2", "p3"), ("p4",))


@pytest.mark.parametrize("hole", [0, 19])
def test_hole_number_out_of_range_is_rejected(hole):
    with pytest.raises(InvalidHoleInput):
        _resolve(_scores(4, 5, 5, 6), hole=hole)


def test_carry_over_below_one_is_rejected():
    with pytest.raises(InvalidHoleInput):
        _resolve(_scores(4, 5, 5, 6), carry=0)


def test_invalid_hole_input_is_a_value_error():
    assert issubclass(InvalidHoleInput, ValueError)

"""Pure Vegas-rules hole resolution."""

from __future__ import annotations

from typing import Dict, Mapping, Tuple

from vegas.config import HOLES_PER_ROUND

from .models import HoleResult, InvalidHoleInput, PlayerId, ScoreInput, TeamPair


def raw_team_score(s1: int, s2: int) -> Tuple[int, int, int]:
    """Return ``(value, low, high)`` with the better score in the tens place."""

    low = min(s1, s2)
    high = max(s1, s2)
    return low * 10 + high, low, high


def flipped_team_score(s1: int, s2: int) -> int:
    _, low, high = raw_team_score(s1, s2)
    return high * 10 + low


def team_has_birdie(scores: Mapping[PlayerId, ScoreInput], team: TeamPair) -> bool:
    return any(scores[player_id].is_birdie for player_id in team)


def compute_applied_multiplier(
    carry_over_multiplier_in: int, total_push_count: int, any_birdie: bool
) -> int:
    # A carry-over of 1 means no standing carry-over.
    carry_over_count = max(0, carry_over_multiplier_in - 1)
    count = carry_over_count + total_push_count + (1 if any_birdie else 0)
    if count == 0:
        return 1
    return count * 2


def _validate_team(team: TeamPair, label: str) -> None:
    if len(team) != 2:
        raise InvalidHoleInput(f"{label} must contain exactly two players")
    if team[0] == team[1]:
        raise InvalidHoleInput(f"{label} lists {team[0]!r} twice")


def _validate_inputs(
    hole_number: int,
    scores: Mapping[PlayerId, ScoreInput],
    team_a: TeamPair,
    team_b: TeamPair,
    carry_over_multiplier_in: int,
) -> None:
    if hole_number < 1 or hole_number > HOLES_PER_ROUND:
        raise InvalidHoleInput(
            f"hole_number must be between 1 and {HOLES_PER_ROUND}, got {hole_number}"
        )
    _validate_team(team_a, "team_a")
    _validate_team(team_b, "team_b")
    if set(team_a) & set(team_b):
        raise InvalidHoleInput("team_a and team_b must not share players")
    expected = set(team_a) | set(team_b)
    if set(scores) != expected:
        missing = sorted(expected - set(scores))
        extra = sorted(set(scores) - expected)
        raise InvalidHoleInput(
            f"scores do not match team members (missing={missing}, extra={extra})"
        )
    if carry_over_multiplier_in < 1:
        raise InvalidHoleInput("carry_over_multiplier_in must be at least 1")


def resolve_hole(
    hole_number: int,
    par: int,
    scores: Mapping[PlayerId, ScoreInput],
    team_a: TeamPair,
    team_b: TeamPair,
    carry_over_multiplier_in: int = 1,
) -> HoleResult:
    """Resolve one hole of a Vegas match.

    Each team's two scores are joined into a two-digit number, better score
    first. A team's digits are reversed when the opposing team has a birdie.
    The lower team number wins the difference, scaled by the applied
    multiplier, and every player on the losing side pays the same amount.
    A draw pays nothing and raises the carry-over for the next hole by one.
    """

    team_a = tuple(team_a)  # type: ignore[assignment]
    team_b = tuple(team_b)  # type: ignore[assignment]
    _validate_inputs(hole_number, scores, team_a, team_b, carry_over_multiplier_in)

    a1, a2 = (scores[pid].strokes for pid in team_a)
    b1, b2 = (scores[pid].strokes for pid in team_b)

    team_a_birdie = team_has_birdie(scores, team_a)
    team_b_birdie = team_has_birdie(scores, team_b)

    if team_b_birdie:
        team_a_score = flipped_team_score(a1, a2)
    else:
        team_a_score, _, _ = raw_team_score(a1, a2)
    if team_a_birdie:
        team_b_score = flipped_team_score(b1, b2)
    else:
        team_b_score, _, _ = raw_team_score(b1, b2)

    is_draw = team_a_score == team_b_score
    diff = abs(team_a_score - team_b_score)

    total_push_count = sum(score.push_count for score in scores.values())
    applied_multiplier = compute_applied_multiplier(
        carry_over_multiplier_in, total_push_count, team_a_birdie or team_b_birdie
    )
    points = diff * applied_multiplier

    points_result: Dict[PlayerId, int] = {pid: 0 for pid in (*team_a, *team_b)}
    if not is_draw:
        if team_a_score < team_b_score:
            winners, losers = team_a, team_b
        else:
            winners, losers = team_b, team_a
        for pid in winners:
            points_result[pid] = points
        for pid in losers:
            points_result[pid] = -points

    next_hole_multiplier = carry_over_multiplier_in + 1 if is_draw else 1

    return HoleResult(
        hole_number=hole_number,
        par=par,
        scores=dict(scores),
        team_a=team_a,
        team_b=team_b,
        carry_over_multiplier_in=carry_over_multiplier_in,
        is_draw=is_draw,
        applied_multiplier=applied_multiplier,
        points_result=points_result,
        next_hole_multiplier=next_hole_multiplier,
        team_a_score=team_a_score,
        team_b_score=team_b_score,
        diff=diff,
    )


__all__ = [
    "raw_team_score",
    "flipped_team_score",
    "team_has_birdie",
    "compute_applied_multiplier",
    "resolve_hole",
]

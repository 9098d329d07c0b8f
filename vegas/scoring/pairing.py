"""Team-pairing suggestions based on honor order."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from .models import HoleResult, InvalidHoleInput, PlayerId, TeamPair

# Sorts players with no score on the previous hole behind everyone else.
_MISSING_STROKES = 999

# Indices into the honor order, keyed by hole_number % 3.
_PATTERNS = {
    1: ((0, 1), (2, 3)),
    2: ((0, 2), (1, 3)),
    0: ((0, 3), (1, 2)),
}


def _previous_hole(
    hole_number: int, history: Iterable[HoleResult]
) -> HoleResult | None:
    for result in history:
        if result.hole_number == hole_number - 1:
            return result
    return None


def honor_order(
    player_ids: Sequence[PlayerId],
    hole_number: int,
    history: Iterable[HoleResult],
) -> List[PlayerId]:
    """Rank players by strokes on the previous hole, best first.

    Ties keep roster order. Without a result for the previous hole the
    roster order is the honor order.
    """

    ranked = list(player_ids)
    if hole_number <= 1:
        return ranked
    previous = _previous_hole(hole_number, history)
    if previous is None:
        return ranked

    def _strokes(player_id: PlayerId) -> int:
        score = previous.scores.get(player_id)
        return score.strokes if score is not None else _MISSING_STROKES

    ranked.sort(key=_strokes)
    return ranked


def recommend_pairs(
    hole_number: int,
    player_ids: Sequence[PlayerId],
    history: Iterable[HoleResult] = (),
) -> Tuple[TeamPair, TeamPair]:
    if len(player_ids) < 4:
        raise InvalidHoleInput("team pairing needs four players")

    order = honor_order(player_ids, hole_number, history)
    (a0, a1), (b0, b1) = _PATTERNS[hole_number % 3]
    return (order[a0], order[a1]), (order[b0], order[b1])


__all__ = ["honor_order", "recommend_pairs"]

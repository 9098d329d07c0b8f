"""Hole scoring for Vegas-rules matches."""

from .engine import (
    compute_applied_multiplier,
    flipped_team_score,
    raw_team_score,
    resolve_hole,
    team_has_birdie,
)
from .models import HoleResult, InvalidHoleInput, PlayerId, ScoreInput, TeamPair
from .pairing import honor_order, recommend_pairs

__all__ = [
    "HoleResult",
    "InvalidHoleInput",
    "PlayerId",
    "ScoreInput",
    "TeamPair",
    "compute_applied_multiplier",
    "flipped_team_score",
    "honor_order",
    "raw_team_score",
    "recommend_pairs",
    "resolve_hole",
    "team_has_birdie",
]

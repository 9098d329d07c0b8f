"""Vegas-rules scoring for four-player, two-team golf matches."""

from .rounds import HoleSubmission, RoundAccumulator, RoundStore
from .scoring import HoleResult, InvalidHoleInput, ScoreInput, resolve_hole

__all__ = [
    "HoleResult",
    "HoleSubmission",
    "InvalidHoleInput",
    "RoundAccumulator",
    "RoundStore",
    "ScoreInput",
    "resolve_hole",
]

from .accumulator import (
    PlayerNotFound,
    RoundAccumulator,
    RoundNotStarted,
    apply_forced_push,
    get_round_accumulator,
)
from .models import (
    HoleSubmission,
    MatchSettings,
    Player,
    PlayerStanding,
    PushUsage,
    Round,
    SavedRoundSummary,
)
from .store import RoundStore, get_round_store

__all__ = [
    "HoleSubmission",
    "MatchSettings",
    "Player",
    "PlayerNotFound",
    "PlayerStanding",
    "PushUsage",
    "Round",
    "RoundAccumulator",
    "RoundNotStarted",
    "RoundStore",
    "SavedRoundSummary",
    "apply_forced_push",
    "get_round_accumulator",
    "get_round_store",
]

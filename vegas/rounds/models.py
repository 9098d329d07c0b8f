from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from vegas.config import FRONT_NINE_LAST, default_language, get_settings
from vegas.scoring.models import HoleResult, PlayerId, ScoreInput, TeamPair

RoundStatus = Literal["setup", "in_progress", "finished"]
Language = Literal["en", "ja"]

UNTITLED_MATCH_NAME = "Untitled Match"


class PushUsage(BaseModel):
    front9: int = Field(default=0, ge=0)
    back9: int = Field(default=0, ge=0)

    def for_hole(self, hole_number: int) -> int:
        return self.front9 if hole_number <= FRONT_NINE_LAST else self.back9


class Player(BaseModel):
    id: PlayerId
    name: str
    push_usage: PushUsage = Field(
        default_factory=PushUsage,
        validation_alias=AliasChoices("push_usage", "pushUsage"),
        serialization_alias="pushUsage",
    )

    model_config = ConfigDict(populate_by_name=True)


def _default_point_rate() -> float:
    return get_settings().point_rate


def _default_max_push() -> int:
    return get_settings().max_push_per_half


class MatchSettings(BaseModel):
    point_rate: float = Field(
        default_factory=_default_point_rate,
        validation_alias=AliasChoices("point_rate", "pointRate", "rate"),
        serialization_alias="pointRate",
    )
    max_push_per_half: int = Field(
        default_factory=_default_max_push,
        ge=0,
        validation_alias=AliasChoices("max_push_per_half", "maxPushPerHalf"),
        serialization_alias="maxPushPerHalf",
    )
    match_name: str = Field(
        default="",
        validation_alias=AliasChoices("match_name", "matchName"),
        serialization_alias="matchName",
    )
    display_language: Language = Field(
        default_factory=default_language,
        validation_alias=AliasChoices("display_language", "displayLanguage"),
        serialization_alias="displayLanguage",
    )

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)


def default_players() -> List[Player]:
    return [
        Player(id="p1", name="Player A"),
        Player(id="p2", name="Player B"),
        Player(id="p3", name="Player C"),
        Player(id="p4", name="Player D"),
    ]


class Round(BaseModel):
    players: List[Player] = Field(
        default_factory=default_players, min_length=4, max_length=4
    )
    settings: MatchSettings = Field(default_factory=MatchSettings)
    current_hole: int = Field(
        default=1,
        ge=1,
        le=18,
        validation_alias=AliasChoices("current_hole", "currentHole"),
        serialization_alias="currentHole",
    )
    status: RoundStatus = "setup"
    history: List[HoleResult] = Field(default_factory=list)
    next_hole_multiplier: int = Field(
        default=1,
        ge=1,
        validation_alias=AliasChoices("next_hole_multiplier", "nextHoleMultiplier"),
        serialization_alias="nextHoleMultiplier",
    )
    started_at: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("started_at", "startedAt"),
        serialization_alias="startedAt",
    )

    model_config = ConfigDict(populate_by_name=True)

    def player(self, player_id: PlayerId) -> Player | None:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    @property
    def player_ids(self) -> List[PlayerId]:
        return [player.id for player in self.players]


class HoleSubmission(BaseModel):
    hole_number: int = Field(
        ge=1,
        le=18,
        validation_alias=AliasChoices("hole_number", "holeNumber"),
        serialization_alias="holeNumber",
    )
    par: int = Field(gt=0)
    team_a: TeamPair = Field(
        validation_alias=AliasChoices("team_a", "teamA"),
        serialization_alias="teamA",
    )
    team_b: TeamPair = Field(
        validation_alias=AliasChoices("team_b", "teamB"),
        serialization_alias="teamB",
    )
    per_player: Dict[PlayerId, ScoreInput] = Field(
        validation_alias=AliasChoices("per_player", "perPlayer"),
        serialization_alias="perPlayer",
    )

    model_config = ConfigDict(populate_by_name=True)


class SavedRoundSummary(BaseModel):
    id: str
    saved_at: datetime = Field(
        validation_alias=AliasChoices("saved_at", "savedAt", "date"),
        serialization_alias="savedAt",
    )
    name: str
    players: List[Player]
    history: List[HoleResult] = Field(default_factory=list)
    final_points: Dict[PlayerId, int] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("final_points", "finalPoints", "finalScores"),
        serialization_alias="finalPoints",
    )
    current_hole: int = Field(
        validation_alias=AliasChoices("current_hole", "currentHole"),
        serialization_alias="currentHole",
    )
    status: RoundStatus

    model_config = ConfigDict(populate_by_name=True)


class PlayerStanding(BaseModel):
    player_id: PlayerId = Field(serialization_alias="playerId")
    name: str
    total_strokes: int = Field(serialization_alias="totalStrokes")
    total_points: int = Field(serialization_alias="totalPoints")
    money: float

    model_config = ConfigDict(populate_by_name=True)


def new_saved_round_id() -> str:
    """Generate a new archived round identifier."""

    return f"round_{uuid.uuid4().hex[:12]}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


__all__ = [
    "RoundStatus",
    "Language",
    "UNTITLED_MATCH_NAME",
    "PushUsage",
    "Player",
    "MatchSettings",
    "Round",
    "HoleSubmission",
    "SavedRoundSummary",
    "PlayerStanding",
    "default_players",
    "new_saved_round_id",
    "utc_now",
]

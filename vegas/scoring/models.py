from __future__ import annotations

from typing import Dict, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

PlayerId = str
TeamPair = Tuple[PlayerId, PlayerId]


class InvalidHoleInput(ValueError):
    """Raised when a hole cannot be resolved from the supplied input."""


class ScoreInput(BaseModel):
    strokes: int = Field(
        gt=0,
        validation_alias=AliasChoices("strokes", "score"),
    )
    is_birdie: bool = Field(
        default=False,
        validation_alias=AliasChoices("is_birdie", "isBirdie"),
        serialization_alias="isBirdie",
    )
    push_count: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("push_count", "pushCount"),
        serialization_alias="pushCount",
    )

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @classmethod
    def from_strokes(cls, strokes: int, par: int, push_count: int = 0) -> "ScoreInput":
        """Build an input, flagging a birdie when the player beat par.

        The flag is fixed here so a later par correction does not change it.
        """

        return cls(strokes=strokes, is_birdie=strokes < par, push_count=push_count)


class HoleResult(BaseModel):
    hole_number: int = Field(
        ge=1,
        le=18,
        validation_alias=AliasChoices("hole_number", "holeNumber"),
        serialization_alias="holeNumber",
    )
    par: int
    scores: Dict[PlayerId, ScoreInput]
    team_a: TeamPair = Field(
        validation_alias=AliasChoices("team_a", "teamA"),
        serialization_alias="teamA",
    )
    team_b: TeamPair = Field(
        validation_alias=AliasChoices("team_b", "teamB"),
        serialization_alias="teamB",
    )
    carry_over_multiplier_in: int = Field(
        ge=1,
        validation_alias=AliasChoices(
            "carry_over_multiplier_in", "carryOverMultiplierIn"
        ),
        serialization_alias="carryOverMultiplierIn",
    )
    is_draw: bool = Field(
        validation_alias=AliasChoices("is_draw", "isDraw"),
        serialization_alias="isDraw",
    )
    applied_multiplier: int = Field(
        ge=1,
        validation_alias=AliasChoices("applied_multiplier", "appliedMultiplier"),
        serialization_alias="appliedMultiplier",
    )
    points_result: Dict[PlayerId, int] = Field(
        validation_alias=AliasChoices("points_result", "pointsResult"),
        serialization_alias="pointsResult",
    )
    next_hole_multiplier: int = Field(
        ge=1,
        validation_alias=AliasChoices("next_hole_multiplier", "nextHoleMultiplier"),
        serialization_alias="nextHoleMultiplier",
    )
    team_a_score: int = Field(
        default=0,
        validation_alias=AliasChoices("team_a_score", "teamAScore"),
        serialization_alias="teamAScore",
    )
    team_b_score: int = Field(
        default=0,
        validation_alias=AliasChoices("team_b_score", "teamBScore"),
        serialization_alias="teamBScore",
    )
    diff: int = 0

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @property
    def winning_team(self) -> TeamPair | None:
        if self.is_draw:
            return None
        return self.team_a if self.team_a_score < self.team_b_score else self.team_b


__all__ = [
    "PlayerId",
    "TeamPair",
    "InvalidHoleInput",
    "ScoreInput",
    "HoleResult",
]

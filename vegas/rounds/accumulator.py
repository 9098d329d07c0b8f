from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Tuple

from vegas.config import BACK_NINE_FIRST, FRONT_NINE_LAST, HOLES_PER_ROUND
from vegas.scoring.engine import resolve_hole
from vegas.scoring.models import (
    HoleResult,
    InvalidHoleInput,
    PlayerId,
    ScoreInput,
    TeamPair,
)
from vegas.scoring.pairing import recommend_pairs
from vegas.telemetry.events import (
    record_hole_completed,
    record_round_reset,
    record_round_saved,
    record_round_started,
)

from .models import (
    UNTITLED_MATCH_NAME,
    HoleSubmission,
    MatchSettings,
    Player,
    PlayerStanding,
    PushUsage,
    Round,
    SavedRoundSummary,
    new_saved_round_id,
    utc_now,
)
from .store import RoundStore, get_round_store

logger = logging.getLogger(__name__)

FORCED_PUSH_HOLES = (FRONT_NINE_LAST, HOLES_PER_ROUND)
STARTING_HOLES = (1, BACK_NINE_FIRST)


class RoundNotStarted(RuntimeError):
    pass


class PlayerNotFound(KeyError):
    pass


def apply_forced_push(
    hole_number: int,
    scores: Mapping[PlayerId, ScoreInput],
    players: List[Player],
    max_push_per_half: int,
) -> Dict[PlayerId, ScoreInput]:
    """Copy ``scores``, spending unused pushes on the last hole of a half.

    On holes 9 and 18 every player still holding pushes for that half has
    their push count set to the full remaining quota, whatever was submitted.
    Other holes are returned unchanged.
    """

    adjusted = dict(scores)
    if hole_number not in FORCED_PUSH_HOLES:
        return adjusted
    for player in players:
        remaining = max(0, max_push_per_half - player.push_usage.for_hole(hole_number))
        if remaining > 0 and player.id in adjusted:
            adjusted[player.id] = adjusted[player.id].model_copy(
                update={"push_count": remaining}
            )
    return adjusted


class RoundAccumulator:
    """Owns the active round and applies every transition to it.

    Callers read copies through the properties and change the round only
    through the methods below. Each transition is persisted to the optional
    store afterwards; a failed write is logged and kept on
    ``last_persistence_error`` without touching the in-memory round.
    """

    def __init__(
        self,
        state: Round | None = None,
        *,
        store: RoundStore | None = None,
        saved_rounds: List[SavedRoundSummary] | None = None,
    ):
        self._round = state or Round()
        self._store = store
        self._saved_rounds: List[SavedRoundSummary] = list(saved_rounds or [])
        self.last_persistence_error: Exception | None = None

    @classmethod
    def restore(cls, store: RoundStore) -> "RoundAccumulator":
        return cls(store.load_state(), store=store, saved_rounds=store.list_archive())

    # Read projections
    @property
    def round(self) -> Round:
        return self._round.model_copy(deep=True)

    @property
    def status(self) -> str:
        return self._round.status

    @property
    def current_hole(self) -> int:
        return self._round.current_hole

    @property
    def next_hole_multiplier(self) -> int:
        return self._round.next_hole_multiplier

    @property
    def history(self) -> List[HoleResult]:
        return list(self._round.history)

    @property
    def players(self) -> List[Player]:
        return [p.model_copy(deep=True) for p in self._round.players]

    @property
    def settings(self) -> MatchSettings:
        return self._round.settings.model_copy()

    @property
    def saved_rounds(self) -> List[SavedRoundSummary]:
        return list(self._saved_rounds)

    # Round lifecycle
    def start_round(self, starting_nine: int = 1) -> Round:
        if starting_nine not in STARTING_HOLES:
            raise ValueError(f"starting_nine must be 1 or 10, got {starting_nine}")

        self._round = Round(
            players=self._fresh_players(),
            settings=self._round.settings.model_copy(),
            current_hole=starting_nine,
            status="in_progress",
            started_at=utc_now(),
        )
        logger.info("round started on hole %s", starting_nine)
        record_round_started(starting_nine, players=len(self._round.players))
        self._persist_state()
        return self.round

    def reset_round(self) -> Round:
        """Abandon the current round, keeping roster, settings and archive."""

        discarded = len(self._round.history)
        self._round = Round(
            players=self._fresh_players(),
            settings=self._round.settings.model_copy(),
        )
        logger.info("round reset, %s resolved holes discarded", discarded)
        record_round_reset(holes_discarded=discarded)
        self._persist_state()
        return self.round

    def complete_hole(
        self,
        par: int,
        scores: Mapping[PlayerId, ScoreInput],
        team_a: TeamPair,
        team_b: TeamPair,
        hole_number: int,
    ) -> HoleResult:
        if self._round.status == "setup":
            raise RoundNotStarted("start_round must be called before completing holes")
        if hole_number < 1 or hole_number > HOLES_PER_ROUND:
            raise InvalidHoleInput(
                f"hole_number must be between 1 and {HOLES_PER_ROUND}, "
                f"got {hole_number}"
            )
        roster = set(self._round.player_ids)
        if set(scores) != roster:
            raise InvalidHoleInput(
                f"scores must cover exactly the round's players: {sorted(roster)}"
            )
        for player_id, score in scores.items():
            available = self.available_pushes(player_id, hole_number)
            if score.push_count > available:
                raise InvalidHoleInput(
                    f"{player_id} declared {score.push_count} pushes "
                    f"with {available} left in this half"
                )

        effective = apply_forced_push(
            hole_number,
            scores,
            self._round.players,
            self._round.settings.max_push_per_half,
        )
        # Edits use the running multiplier as it stands now; later holes
        # are not recomputed.
        result = resolve_hole(
            hole_number,
            par,
            effective,
            team_a,
            team_b,
            self._round.next_hole_multiplier,
        )

        replaced = self.hole_result(hole_number) is not None
        if replaced:
            self.replace_hole(result)
        else:
            self.append_hole(result)
        self._consume_pushes(hole_number, effective)
        self._round.next_hole_multiplier = result.next_hole_multiplier

        if hole_number >= HOLES_PER_ROUND:
            self._round.current_hole = HOLES_PER_ROUND
            self._round.status = "finished"
        else:
            self._round.current_hole = hole_number + 1

        forced = any(
            effective[pid].push_count != scores[pid].push_count for pid in effective
        )
        logger.info(
            "hole %s %s: draw=%s multiplier=%s next=%s",
            hole_number,
            "replaced" if replaced else "completed",
            result.is_draw,
            result.applied_multiplier,
            result.next_hole_multiplier,
        )
        record_hole_completed(
            hole_number,
            is_draw=result.is_draw,
            applied_multiplier=result.applied_multiplier,
            replaced=replaced,
            forced_push=forced,
        )
        self._persist_state()
        return result

    def submit(self, submission: HoleSubmission) -> HoleResult:
        return self.complete_hole(
            submission.par,
            submission.per_player,
            submission.team_a,
            submission.team_b,
            submission.hole_number,
        )

    def go_to_hole(self, hole_number: int) -> int:
        self._round.current_hole = max(1, min(HOLES_PER_ROUND, int(hole_number)))
        self._persist_state()
        return self._round.current_hole

    # History
    def hole_result(self, hole_number: int) -> HoleResult | None:
        for result in self._round.history:
            if result.hole_number == hole_number:
                return result
        return None

    def append_hole(self, result: HoleResult) -> None:
        if self.hole_result(result.hole_number) is not None:
            raise ValueError(f"hole {result.hole_number} is already resolved")
        self._round.history.append(result)
        self._round.history.sort(key=lambda h: h.hole_number)

    def replace_hole(self, result: HoleResult) -> HoleResult:
        """Swap in ``result`` for the stored hole with the same number."""

        for index, existing in enumerate(self._round.history):
            if existing.hole_number == result.hole_number:
                self._round.history[index] = result
                return existing
        raise ValueError(f"hole {result.hole_number} has not been resolved")

    # Queries
    def get_player_total_points(self, player_id: PlayerId) -> int:
        return sum(h.points_result.get(player_id, 0) for h in self._round.history)

    def get_player_total_strokes(self, player_id: PlayerId) -> int:
        total = 0
        for hole in self._round.history:
            score = hole.scores.get(player_id)
            if score is not None:
                total += score.strokes
        return total

    def money_for(self, player_id: PlayerId) -> float:
        return self.get_player_total_points(player_id) * self._round.settings.point_rate

    def standings(self) -> List[PlayerStanding]:
        return [
            PlayerStanding(
                player_id=player.id,
                name=player.name,
                total_strokes=self.get_player_total_strokes(player.id),
                total_points=self.get_player_total_points(player.id),
                money=self.money_for(player.id),
            )
            for player in self._round.players
        ]

    def available_pushes(
        self, player_id: PlayerId, hole_number: int | None = None
    ) -> int:
        player = self._require_player(player_id)
        hole = hole_number or self._round.current_hole
        used = player.push_usage.for_hole(hole)
        return max(0, self._round.settings.max_push_per_half - used)

    def recommend_pairs(
        self, hole_number: int | None = None
    ) -> Tuple[TeamPair, TeamPair]:
        hole = hole_number or self._round.current_hole
        return recommend_pairs(hole, self._round.player_ids, self._round.history)

    # Roster and settings
    def update_player_name(self, player_id: PlayerId, name: str) -> Player:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValueError("player name must not be blank")
        player = self._require_player(player_id)
        player.name = cleaned
        self._persist_state()
        return player.model_copy(deep=True)

    def update_settings(self, **changes: Any) -> MatchSettings:
        unknown = set(changes) - set(MatchSettings.model_fields)
        if unknown:
            raise ValueError(f"unknown settings: {sorted(unknown)}")
        merged = self._round.settings.model_dump()
        merged.update(changes)
        self._round.settings = MatchSettings.model_validate(merged)
        self._persist_state()
        return self.settings

    def set_language(self, language: str) -> MatchSettings:
        return self.update_settings(display_language=language)

    # Archive
    def save_round_snapshot(self) -> SavedRoundSummary | None:
        """Archive the round as it stands; rounds with no holes are skipped."""

        if not self._round.history:
            return None

        summary = SavedRoundSummary(
            id=new_saved_round_id(),
            saved_at=utc_now(),
            name=self._round.settings.match_name or UNTITLED_MATCH_NAME,
            players=self.players,
            history=self.history,
            final_points={
                player.id: self.get_player_total_points(player.id)
                for player in self._round.players
            },
            current_hole=self._round.current_hole,
            status=self._round.status,
        )
        self._saved_rounds.insert(0, summary)
        logger.info("saved round %s (%s holes)", summary.id, len(summary.history))
        record_round_saved(
            summary.id, holes=len(summary.history), status=summary.status
        )
        self._persist_archive()
        return summary

    # Internal helpers
    def _require_player(self, player_id: PlayerId) -> Player:
        player = self._round.player(player_id)
        if player is None:
            raise PlayerNotFound(player_id)
        return player

    def _fresh_players(self) -> List[Player]:
        return [
            player.model_copy(update={"push_usage": PushUsage()})
            for player in self._round.players
        ]

    def _consume_pushes(
        self, hole_number: int, effective: Mapping[PlayerId, ScoreInput]
    ) -> None:
        for player in self._round.players:
            score = effective.get(player.id)
            if score is None or score.push_count <= 0:
                continue
            if hole_number <= FRONT_NINE_LAST:
                player.push_usage.front9 += score.push_count
            else:
                player.push_usage.back9 += score.push_count

    def _persist_state(self) -> None:
        if self._store is None:
            return
        try:
            self._store.save_state(self._round)
        except (OSError, ValueError) as exc:
            logger.warning("failed to persist round state: %s", exc)
            self.last_persistence_error = exc
        else:
            self.last_persistence_error = None

    def _persist_archive(self) -> None:
        if self._store is None:
            return
        try:
            self._store.save_archive(self._saved_rounds)
        except (OSError, ValueError) as exc:
            logger.warning("failed to persist round archive: %s", exc)
            self.last_persistence_error = exc
        else:
            self.last_persistence_error = None


@lru_cache(maxsize=1)
def get_round_accumulator() -> RoundAccumulator:
    return RoundAccumulator.restore(get_round_store())


__all__ = [
    "FORCED_PUSH_HOLES",
    "RoundAccumulator",
    "RoundNotStarted",
    "PlayerNotFound",
    "apply_forced_push",
    "get_round_accumulator",
]

"""Telemetry helpers for round lifecycle instrumentation."""

from __future__ import annotations

import logging
from typing import Callable, Dict, Mapping, MutableMapping, Optional

RoundTelemetryEmitter = Callable[[str, Mapping[str, object]], None]

_emitter: Optional[RoundTelemetryEmitter] = None
_logger = logging.getLogger("vegas.telemetry.events")


def set_events_telemetry_emitter(candidate: RoundTelemetryEmitter | None) -> None:
    """Register a telemetry emitter used for round instrumentation."""

    global _emitter
    _emitter = candidate if callable(candidate) else None


def _safe_emit(event: str, payload: MutableMapping[str, object]) -> None:
    if not _emitter:
        _logger.debug("telemetry emitter not configured for event %s", event)
        return
    try:
        _emitter(event, dict(payload))
    except Exception:  # pragma: no cover - defensive logging only
        _logger.exception("failed to emit telemetry event %s", event)


def record_round_started(starting_hole: int, *, players: int) -> None:
    payload: Dict[str, object] = {
        "startingHole": int(starting_hole),
        "players": int(players),
        "ts": _now_ms(),
    }
    _safe_emit("round.start", payload)


def record_hole_completed(
    hole_number: int,
    *,
    is_draw: bool,
    applied_multiplier: int,
    replaced: bool,
    forced_push: bool = False,
) -> None:
    payload: Dict[str, object] = {
        "holeNumber": int(hole_number),
        "isDraw": bool(is_draw),
        "appliedMultiplier": int(applied_multiplier),
        "replaced": bool(replaced),
        "ts": _now_ms(),
    }
    if forced_push:
        payload["forcedPush"] = True
    _safe_emit("hole.complete", payload)


def record_round_saved(round_id: str, *, holes: int, status: str) -> None:
    payload: Dict[str, object] = {
        "roundId": round_id,
        "holes": int(holes),
        "status": status,
        "ts": _now_ms(),
    }
    _safe_emit("round.save", payload)


def record_round_reset(*, holes_discarded: int) -> None:
    payload: Dict[str, object] = {
        "holesDiscarded": int(max(0, holes_discarded)),
        "ts": _now_ms(),
    }
    _safe_emit("round.reset", payload)


def _now_ms() -> int:
    from time import time

    return int(time() * 1000)


__all__ = [
    "RoundTelemetryEmitter",
    "set_events_telemetry_emitter",
    "record_round_started",
    "record_hole_completed",
    "record_round_saved",
    "record_round_reset",
]

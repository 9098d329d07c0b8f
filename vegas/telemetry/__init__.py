"""Telemetry helpers for round lifecycle instrumentation."""

from .events import (
    record_hole_completed,
    record_round_reset,
    record_round_saved,
    record_round_started,
    set_events_telemetry_emitter,
)

__all__ = [
    "record_hole_completed",
    "record_round_reset",
    "record_round_saved",
    "record_round_started",
    "set_events_telemetry_emitter",
]

"""Shared pytest fixtures for the scoring and round tests."""

from __future__ import annotations

import pytest

from vegas.config import reset_settings_cache
from vegas.rounds.accumulator import RoundAccumulator
from vegas.rounds.store import RoundStore
from vegas.telemetry.events import set_events_telemetry_emitter

_ENV_VARS = (
    "VEGAS_DATA_DIR",
    "VEGAS_STORAGE_NAMESPACE",
    "VEGAS_POINT_RATE",
    "VEGAS_MAX_PUSH_PER_HALF",
    "VEGAS_LANGUAGE",
)


@pytest.fixture(autouse=True)
def _isolated_settings(tmp_path, monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("VEGAS_DATA_DIR", str(tmp_path / "data"))
    reset_settings_cache()
    yield
    reset_settings_cache()
    set_events_telemetry_emitter(None)


@pytest.fixture
def round_store(tmp_path) -> RoundStore:
    return RoundStore(base_dir=tmp_path / "store")


@pytest.fixture
def accumulator(round_store: RoundStore) -> RoundAccumulator:
    acc = RoundAccumulator(store=round_store)
    acc.update_settings(point_rate=10, max_push_per_half=2)
    return acc


@pytest.fixture
def started(accumulator: RoundAccumulator) -> RoundAccumulator:
    accumulator.start_round(1)
    return accumulator

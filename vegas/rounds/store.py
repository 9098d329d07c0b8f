from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, List

from vegas.config import get_settings

from .models import Round, SavedRoundSummary

logger = logging.getLogger(__name__)


class RoundStore:
    """JSON file storage for the active round and the saved-round archive.

    Two documents live side by side in ``base_dir``: ``<namespace>.json``
    holds the serialized round state and ``<namespace>.archive.json`` holds
    the archived summaries, newest first.
    """

    def __init__(
        self, base_dir: Path | str | None = None, namespace: str | None = None
    ):
        settings = get_settings()
        base = Path(base_dir or settings.data_dir).expanduser()
        self._base_dir = base.resolve()
        self._namespace = namespace or settings.storage_namespace

    @property
    def state_path(self) -> Path:
        return self._base_dir / f"{self._namespace}.json"

    @property
    def archive_path(self) -> Path:
        return self._base_dir / f"{self._namespace}.archive.json"

    # Round state
    def load_state(self) -> Round | None:
        raw = self._read_json(self.state_path)
        if not isinstance(raw, dict):
            return None
        try:
            return Round.model_validate(raw)
        except ValueError:
            logger.warning("discarding unreadable round state at %s", self.state_path)
            return None

    def save_state(self, state: Round) -> None:
        payload = state.model_dump(mode="json", by_alias=True)
        self._write_json(self.state_path, payload)

    def clear_state(self) -> None:
        try:
            self.state_path.unlink()
        except FileNotFoundError:
            pass

    # Archive
    def list_archive(self) -> List[SavedRoundSummary]:
        raw = self._read_json(self.archive_path)
        if not isinstance(raw, list):
            return []
        summaries: List[SavedRoundSummary] = []
        for entry in raw:
            try:
                summaries.append(SavedRoundSummary.model_validate(entry))
            except ValueError:
                continue
        return summaries

    def save_archive(self, summaries: List[SavedRoundSummary]) -> None:
        payload = [s.model_dump(mode="json", by_alias=True) for s in summaries]
        self._write_json(self.archive_path, payload)

    # Internal helpers
    def _read_json(self, path: Path) -> Any:
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return None

    def _write_json(self, path: Path, payload: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = path.with_suffix(".tmp")
        try:
            with temp_path.open("w", encoding="utf-8") as handle:
                json.dump(payload, handle, indent=2, sort_keys=True)
                handle.write("\n")
            os.replace(temp_path, path)
        finally:
            temp_path.unlink(missing_ok=True)


@lru_cache(maxsize=1)
def get_round_store() -> RoundStore:
    return RoundStore()


__all__ = ["RoundStore", "get_round_store"]

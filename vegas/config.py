"""Configuration helpers for match defaults and storage locations."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

HOLES_PER_ROUND = 18
FRONT_NINE_LAST = 9
BACK_NINE_FIRST = 10

DEFAULT_STORAGE_NAMESPACE = "golf-lasvegas-storage"
SUPPORTED_LANGUAGES = ("en", "ja")


class _Settings(BaseSettings):
    data_dir: Path = Field(default=Path("data/vegas"), alias="VEGAS_DATA_DIR")
    storage_namespace: str = Field(
        default=DEFAULT_STORAGE_NAMESPACE, alias="VEGAS_STORAGE_NAMESPACE"
    )
    point_rate: float = Field(default=10.0, alias="VEGAS_POINT_RATE")
    max_push_per_half: int = Field(default=2, ge=0, alias="VEGAS_MAX_PUSH_PER_HALF")
    language: str = Field(default="ja", alias="VEGAS_LANGUAGE")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> _Settings:
    """Return cached application settings."""

    return _Settings()  # type: ignore[call-arg]


def reset_settings_cache() -> None:
    """Clear cached settings (primarily for tests)."""

    get_settings.cache_clear()


def default_language() -> str:
    value = (get_settings().language or "").strip().lower()
    if value in SUPPORTED_LANGUAGES:
        return value
    return "ja"


__all__ = [
    "HOLES_PER_ROUND",
    "FRONT_NINE_LAST",
    "BACK_NINE_FIRST",
    "DEFAULT_STORAGE_NAMESPACE",
    "SUPPORTED_LANGUAGES",
    "get_settings",
    "reset_settings_cache",
    "default_language",
]

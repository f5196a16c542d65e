"""Runtime settings resolved from the environment."""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field

from itinerary_engine.domain.constants import DEFAULT_SLOT_MINUTES

_GEOCODER_PROVIDERS = {"mock", "nominatim"}
DEFAULT_GEOCODER_BASE_URL = "https://nominatim.openstreetmap.org/search"
DEFAULT_GEOCODER_USER_AGENT = "itinerary-engine/1.0"
DEFAULT_ATTRACTION_DATA_FILE = Path(__file__).resolve().parent.parent / "data" / "attractions_v1.json"


def _env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return value.strip() if value and value.strip() else default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def resolve_geocoder_provider() -> str:
    mode = _env_str("GEOCODER_PROVIDER", "mock").lower()
    return mode if mode in _GEOCODER_PROVIDERS else "mock"


class EngineSettings(BaseModel):
    geocoder_provider: str = Field(default="mock")
    geocoder_base_url: str = Field(default=DEFAULT_GEOCODER_BASE_URL)
    geocoder_user_agent: str = Field(default=DEFAULT_GEOCODER_USER_AGENT)
    geocoder_timeout_seconds: float = Field(default=5.0, gt=0)
    geocode_cache_ttl_seconds: float = Field(default=86400.0, ge=0)
    slot_minutes: int = Field(default=DEFAULT_SLOT_MINUTES, ge=1, le=60)
    attraction_data_file: Path = Field(default=DEFAULT_ATTRACTION_DATA_FILE)


def load_settings() -> EngineSettings:
    slot_minutes = _env_int("LAYOUT_SLOT_MINUTES", DEFAULT_SLOT_MINUTES)
    if not 1 <= slot_minutes <= 60:
        slot_minutes = DEFAULT_SLOT_MINUTES
    return EngineSettings(
        geocoder_provider=resolve_geocoder_provider(),
        geocoder_base_url=_env_str("GEOCODER_BASE_URL", DEFAULT_GEOCODER_BASE_URL),
        geocoder_user_agent=_env_str("GEOCODER_USER_AGENT", DEFAULT_GEOCODER_USER_AGENT),
        geocoder_timeout_seconds=max(0.1, _env_float("GEOCODER_TIMEOUT_SECONDS", 5.0)),
        geocode_cache_ttl_seconds=max(0.0, _env_float("GEOCODE_CACHE_TTL_SECONDS", 86400.0)),
        slot_minutes=slot_minutes,
        attraction_data_file=Path(_env_str("ATTRACTION_DATA_FILE", str(DEFAULT_ATTRACTION_DATA_FILE))),
    )


__all__ = [
    "EngineSettings",
    "load_settings",
    "resolve_geocoder_provider",
]

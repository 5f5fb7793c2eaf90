"""Environment-driven application settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


def _env_float(name: str, default: float) -> float:
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        return float(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a float, got {raw_value!r}") from exc


def _env_optional_int(name: str) -> Optional[int]:
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return None
    try:
        return int(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw_value!r}") from exc


@dataclass(frozen=True)
class Settings:
    """Immutable runtime configuration.

    Optimizer search bounds live in ``backend.domain.constraints``.
    """

    app_name: str = "Hotel Room Reservation"
    app_version: str = "1.0.0"
    log_level: str = "INFO"
    random_occupancy_probability: float = 0.3
    random_occupancy_seed: Optional[int] = None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings once per process from environment variables."""
    defaults = Settings()
    settings = Settings(
        app_name=os.getenv("APP_NAME", defaults.app_name),
        app_version=os.getenv("APP_VERSION", defaults.app_version),
        log_level=os.getenv("LOG_LEVEL", defaults.log_level),
        random_occupancy_probability=_env_float(
            "RANDOM_OCCUPANCY_PROBABILITY",
            defaults.random_occupancy_probability,
        ),
        random_occupancy_seed=_env_optional_int("RANDOM_OCCUPANCY_SEED"),
    )
    if not 0.0 <= settings.random_occupancy_probability <= 1.0:
        raise ValueError("RANDOM_OCCUPANCY_PROBABILITY must be between 0 and 1")
    return settings

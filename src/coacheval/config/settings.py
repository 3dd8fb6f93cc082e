"""Environment-driven runtime settings."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass


logger = logging.getLogger(__name__)

_RECENT_LIMIT_ENV = "COACHEVAL_RECENT_LIMIT"
_TEAM_NAME_ENV = "COACHEVAL_TEAM_NAME"

_RECENT_LIMIT_DEFAULT = 20
_TEAM_NAME_DEFAULT = "Northview Falcons"


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


@dataclass(frozen=True)
class Settings:
    recent_limit: int
    team_name: str


def load_settings() -> Settings:
    """Read settings from the environment, falling back to defaults."""

    return Settings(
        recent_limit=_env_int(_RECENT_LIMIT_ENV, _RECENT_LIMIT_DEFAULT, min_value=1),
        team_name=os.getenv(_TEAM_NAME_ENV) or _TEAM_NAME_DEFAULT,
    )

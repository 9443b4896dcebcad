"""Deployment settings for the CORTEX case engine.

Knobs that vary per deployment live here, away from the game domain:
log level, default toggles and the re-evaluation policy. Values come from
the process environment, optionally seeded from a ``.env`` file.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from game.errors import SettingsError

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _parse_bool(name: str, raw: Optional[str], default: bool) -> bool:
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise SettingsError(f"{name} must be a boolean, got {raw!r}")


def _parse_int(name: str, raw: Optional[str], default: int) -> int:
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise SettingsError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise SettingsError(f"{name} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class GameSettings:
    """Environment / deployment settings."""

    log_level: str = "INFO"
    hints_enabled: bool = True
    starting_location_id: Optional[str] = None  # None means first catalog location
    feed_max_entries: int = 200
    allow_reevaluation: bool = True

    @classmethod
    def from_env(cls, environ=None, dotenv: bool = True) -> "GameSettings":
        """Build settings from environment variables."""
        if environ is None:
            if dotenv:
                load_dotenv()
            environ = os.environ

        log_level = (environ.get("CORTEX_LOG_LEVEL") or "INFO").strip().upper()
        if log_level not in _LOG_LEVELS:
            raise SettingsError(f"CORTEX_LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}, got {log_level!r}")

        return cls(
            log_level=log_level,
            hints_enabled=_parse_bool(
                "CORTEX_HINTS_ENABLED", environ.get("CORTEX_HINTS_ENABLED"), True
            ),
            starting_location_id=(environ.get("CORTEX_STARTING_LOCATION") or "").strip() or None,
            feed_max_entries=_parse_int(
                "CORTEX_FEED_MAX_ENTRIES", environ.get("CORTEX_FEED_MAX_ENTRIES"), 200
            ),
            allow_reevaluation=_parse_bool(
                "CORTEX_ALLOW_REEVALUATION", environ.get("CORTEX_ALLOW_REEVALUATION"), True
            ),
        )


def get_settings() -> GameSettings:
    """Convenience accessor for environment settings."""
    return GameSettings.from_env()

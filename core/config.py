"""
Runtime configuration.

Values come from environment variables so the CLI, the Streamlit app and
the tests can all tune network behaviour without code changes.
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

log = logging.getLogger(__name__)

ENGINE_VERSION = "0.1.0"
DEFAULT_USER_AGENT = (
    "RegenerativeEarthProject/0.1 "
    "(open-source humanitarian project; https://github.com/regenerative-earth-project)"
)


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        log.warning(f"Ignoring invalid value for {name}: {raw!r}")
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Network and logging settings."""
    user_agent: str = DEFAULT_USER_AGENT
    http_timeout: float = 10.0      # seconds, elevation + geocoder
    climate_timeout: float = 15.0   # seconds, Open-Meteo returns a year of dailies
    nominatim_interval: float = 1.1  # Nominatim policy: max 1 request/second
    parallel_fetch: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            user_agent=os.environ.get("REGEN_USER_AGENT", DEFAULT_USER_AGENT),
            http_timeout=_env_float("REGEN_HTTP_TIMEOUT", 10.0),
            climate_timeout=_env_float("REGEN_CLIMATE_TIMEOUT", 15.0),
            nominatim_interval=_env_float("REGEN_NOMINATIM_INTERVAL", 1.1),
            parallel_fetch=_env_bool("REGEN_PARALLEL_FETCH", True),
            log_level=os.environ.get("REGEN_LOG_LEVEL", "INFO").upper(),
        )


_settings: Optional[Settings] = None

def get_settings() -> Settings:
    """Get the process settings, read from the environment on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings():
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None

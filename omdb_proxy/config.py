from __future__ import annotations

import os
from typing import Any, Mapping

from .errors import ConfigError

OMDB_URL = "http://www.omdbapi.com/"
REQUEST_TIMEOUT_SECONDS = 30
MAX_RETRIES = 3
BACKOFF_BASE = 3
DEFAULT_LOG_LEVEL = "INFO"


def _number(environ: Mapping[str, str], name: str, default: float, cast: type) -> Any:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


def load_config(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Read service settings from the environment.

    The OMDB API key has no default. It is checked by the application
    factory so tests can supply one through ``test_config`` instead.
    """
    if environ is None:
        environ = os.environ
    return {
        "OMDB_API_KEY": environ.get("OMDB_API_KEY", "").strip(),
        "OMDB_BASE_URL": environ.get("OMDB_BASE_URL", "").strip() or OMDB_URL,
        "OMDB_TIMEOUT": _number(environ, "OMDB_TIMEOUT", REQUEST_TIMEOUT_SECONDS, float),
        "OMDB_RETRIES": _number(environ, "OMDB_RETRIES", MAX_RETRIES, int),
        "OMDB_BACKOFF_BASE": _number(environ, "OMDB_BACKOFF_BASE", BACKOFF_BASE, float),
        "LOG_LEVEL": environ.get("LOG_LEVEL", "").strip().upper() or DEFAULT_LOG_LEVEL,
    }

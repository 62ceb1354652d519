# src/openrouter_client/utils/load_config.py

"""Load a JSON client-config file with mtime-keyed caching.

The file must hold a single JSON object. An optional validator may reshape or
reject it; validated results are not cached, because the validator may have
side effects or depend on state outside the file.

Used by `Configuration.from_file` and by tests needing hot reload.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

# ── Public surface ────────────────────────────────────────────────────────────
__all__ = [
    "load_config",
    "clear_config_cache",
    "ConfigFileNotFound",
    "ConfigParseError",
    "ConfigTypeError",
]


# ── Exceptions ───────────────────────────────────────────────────────────────
class ConfigFileNotFound(FileNotFoundError):
    """Raise when the requested config file cannot be read or resolved."""


class ConfigParseError(ValueError):
    """Raise when JSON parsing/validation fails for a config file."""


class ConfigTypeError(TypeError):
    """Raise when the parsed JSON is not an object."""


# ── Logging & cache ──────────────────────────────────────────────────────────
log = logging.getLogger(__name__)
_CACHE_LOCK = threading.RLock()
# cache key: resolved path, mtime, encoding
_CONFIG_CACHE: dict[tuple[Path, float, str], dict[str, Any]] = {}


def clear_config_cache() -> None:
    """Empty the in-memory config cache (useful for pytest/hot-reload)."""
    with _CACHE_LOCK:
        _CONFIG_CACHE.clear()
        log.debug("Config cache cleared.")


def load_config(
    file: str | os.PathLike[str],
    *,
    encoding: str = "utf-8",
    validator: Callable[[dict[str, Any]], dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Read <file> as a JSON object, optionally validate it, and cache the raw result."""
    path = Path(os.path.expanduser(os.fspath(file))).resolve()
    if not path.is_file():
        raise ConfigFileNotFound(f"Config file not found: {path}")

    try:
        mtime = path.stat().st_mtime
    except OSError as e:
        raise ConfigFileNotFound(f"Cannot stat {path}: {e}") from e

    cache_key = (path, mtime, encoding)

    with _CACHE_LOCK:
        cached = _CONFIG_CACHE.get(cache_key)
    if cached is not None and validator is None:
        log.debug("Config cache HIT: %s", path.name)
        return dict(cached)

    try:
        with path.open("r", encoding=encoding) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise ConfigFileNotFound(f"Cannot read {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigTypeError(f"{path.name}: expected a JSON object, got {type(data).__name__}")

    if validator is not None:
        try:
            result = validator(data)
        except Exception as e:
            raise ConfigParseError(f"{path.name}: validator failed: {e}") from e
        log.debug("Config loaded (validator present, not cached): %s", path.name)
        return result

    with _CACHE_LOCK:
        _CONFIG_CACHE[cache_key] = data
    log.debug("Config cache MISS → STORED: %s", path.name)
    return dict(data)

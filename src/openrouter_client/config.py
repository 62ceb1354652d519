"""
config.py.
=========

Does: Hold the immutable client configuration (token, URI base, API version,
      timeout, extra headers, error logging) and build it from env or a JSON file.
Used by: Client construction and HTTPTransport.
Returns: `Configuration` instances; raises ConfigurationError on bad input.
"""

from __future__ import annotations

# ── Imports & Typing ─────────────────────────────────────────────────────────
import logging
import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping

from openrouter_client.errors import ConfigurationError
from openrouter_client.utils.load_config import load_config

# ── Logger ───────────────────────────────────────────────────────────────────
logger = logging.getLogger(__name__)

# ── Defaults ─────────────────────────────────────────────────────────────────
DEFAULT_URI_BASE = "https://openrouter.ai/api"
DEFAULT_API_VERSION = "v1"
DEFAULT_REQUEST_TIMEOUT = 120.0  # seconds

_TRUTHY = frozenset({"1", "true", "yes", "on"})

__all__ = [
    "Configuration",
    "DEFAULT_URI_BASE",
    "DEFAULT_API_VERSION",
    "DEFAULT_REQUEST_TIMEOUT",
]


@dataclass(frozen=True)
class Configuration:
    """Does: Immutable settings shared by the client and its transport.
    Args: access_token, uri_base, api_version, request_timeout, extra_headers, log_errors.
    Returns: A value object; derive variants with `override()` or `with_site()`.
    """

    access_token: str | None = None
    uri_base: str = DEFAULT_URI_BASE
    api_version: str = DEFAULT_API_VERSION
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    extra_headers: Mapping[str, str] = field(default_factory=dict)
    log_errors: bool = False

    def require_access_token(self) -> str:
        """Does: Return the bearer token or fail loudly if none was configured."""
        if not self.access_token:
            raise ConfigurationError("OpenRouter access token missing!")
        return self.access_token

    def override(self, **changes: Any) -> Configuration:
        """Does: Copy with every non-None / non-empty keyword applied.
        Args: any Configuration field name.
        Returns: New Configuration (self is untouched).
        """
        applied = {k: v for k, v in changes.items() if v is not None and v != {}}
        if "extra_headers" in applied:
            applied["extra_headers"] = dict(applied["extra_headers"])
        return replace(self, **applied) if applied else self

    def with_site(self, name: str | None = None, url: str | None = None) -> Configuration:
        """Does: Set the X-Title / HTTP-Referer headers OpenRouter uses for app rankings."""
        headers = dict(self.extra_headers)
        if name:
            headers["X-Title"] = name
        if url:
            headers["HTTP-Referer"] = url
        return replace(self, extra_headers=headers)

    # ── Builders ─────────────────────────────────────────────────────────────
    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Configuration:
        """Does: Build a configuration from OPENROUTER_* environment variables.
        Args: environ: mapping to read instead of os.environ (tests).
        Returns: Configuration with defaults for anything unset.
        """
        env = os.environ if environ is None else environ
        timeout_raw = env.get("OPENROUTER_REQUEST_TIMEOUT")
        try:
            timeout = float(timeout_raw) if timeout_raw else DEFAULT_REQUEST_TIMEOUT
        except ValueError as e:
            raise ConfigurationError(
                f"OPENROUTER_REQUEST_TIMEOUT must be a number, got {timeout_raw!r}"
            ) from e

        return cls(
            access_token=env.get("OPENROUTER_API_KEY") or env.get("OPENROUTER_ACCESS_TOKEN"),
            uri_base=env.get("OPENROUTER_URI_BASE") or DEFAULT_URI_BASE,
            api_version=env.get("OPENROUTER_API_VERSION") or DEFAULT_API_VERSION,
            request_timeout=timeout,
            log_errors=env.get("OPENROUTER_LOG_ERRORS", "").strip().lower() in _TRUTHY,
        )

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> Configuration:
        """Does: Build a configuration from a JSON object whose keys are field names.
        Args: path: JSON file, e.g. {"access_token": "...", "request_timeout": 30}.
        Returns: Configuration; unknown keys raise ConfigurationError.
        """
        data = load_config(path)
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")
        for key in ("access_token", "uri_base", "api_version"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ConfigurationError(f"{key} must be a string, got {type(value).__name__}")

        if "request_timeout" in data:
            timeout = data["request_timeout"]
            # bool is an int subclass; "30" is a string, not a number
            if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
                raise ConfigurationError(
                    f"request_timeout must be a number, got {timeout!r}"
                )
            data["request_timeout"] = float(timeout)

        if "log_errors" in data and not isinstance(data["log_errors"], bool):
            raise ConfigurationError("log_errors must be true or false")

        headers = data.get("extra_headers", {})
        if not isinstance(headers, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in headers.items()
        ):
            raise ConfigurationError("extra_headers must be a JSON object of strings")
        logger.debug("Loaded configuration keys from %s: %s", path, sorted(data))
        return cls(**{**data, "extra_headers": dict(headers)})

# openrouter_client/utils/__init__.py
"""

Does: Provide config-file loading and lightweight debug tracing for the client stack.
Returns: Public API via load_config/clear_config_cache and debug/redact/reload_topics.
Used by: Configuration, the HTTP transport, and tests.
"""

from __future__ import annotations

from .load_config import (
    ConfigFileNotFound,
    ConfigParseError,
    ConfigTypeError,
    clear_config_cache,
    load_config,
)
from .log import (
    debug,
    redact,
    reload_topics,
    topic_enabled,
)

__all__ = [
    # Config loading
    "load_config",
    "clear_config_cache",
    "ConfigFileNotFound",
    "ConfigParseError",
    "ConfigTypeError",
    # Logging helpers
    "debug",
    "redact",
    "reload_topics",
    "topic_enabled",
]

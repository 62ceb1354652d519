"""
log.py.

Does: Topic-gated debug tracer controlled by OPENROUTER_DEBUG_TOPICS (comma-sep or 'all').
Returns: Prints timestamped lines with topic + level, bearer tokens redacted.
Used by: The HTTP transport (topics 'http' and 'stream') and tests.
"""

from __future__ import annotations

import os
import re
import sys
from datetime import datetime
from typing import TextIO

__all__ = ["debug", "redact", "reload_topics", "topic_enabled"]

_BEARER_RE = re.compile(r"(Bearer) (\S+)", re.IGNORECASE)


def _load_topics() -> set[str]:
    raw = os.getenv("OPENROUTER_DEBUG_TOPICS", "")
    return {t.strip().lower() for t in raw.split(",") if t.strip()}


_DEBUG_TOPICS = _load_topics()


def reload_topics() -> None:
    """Does: Reload topics from environment variable OPENROUTER_DEBUG_TOPICS."""
    global _DEBUG_TOPICS
    _DEBUG_TOPICS = _load_topics()


def topic_enabled(topic: str) -> bool:
    """Does: Tell whether a topic is switched on (nothing set means everything is off)."""
    if not _DEBUG_TOPICS:
        return False
    return "all" in _DEBUG_TOPICS or topic.lower().strip() in _DEBUG_TOPICS


def redact(msg: str) -> str:
    """Does: Mask bearer credentials, e.g. 'Bearer sk-abc' -> 'Bearer [REDACTED]'."""
    return _BEARER_RE.sub(r"\1 [REDACTED]", msg)


def debug(
    msg: str,
    topic: str = "http",
    *,
    level: str = "DEBUG",
    stream: TextIO | None = None,
) -> None:
    """Does: Print a timestamped, redacted debug line with topic and level
    if enabled via OPENROUTER_DEBUG_TOPICS.
    """
    if not topic_enabled(topic):
        return
    if stream is None:
        stream = sys.stderr
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    print(f"[{ts}] [{topic.lower().strip()}][{level.upper()}] {redact(msg)}", file=stream)

"""
response.py.
===========

Does: Validate decoded completion responses (error payloads, empty bodies) and
      expose mappings with case-insensitive keys.
Returns: The validated response; raises ServerError.
Used by: Client.complete.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from requests.structures import CaseInsensitiveDict

from openrouter_client.errors import ServerError

EMPTY_RESPONSE_MESSAGE = "Empty response from OpenRouter. Might be worth retrying once or twice."

__all__ = [
    "EMPTY_RESPONSE_MESSAGE",
    "error_message",
    "indifferent_access",
    "plain",
    "validate_completion_response",
]


def indifferent_access(value: Any) -> Any:
    """Does: Recursively wrap mappings in CaseInsensitiveDict (lists are walked too).
    Args: value: decoded JSON value.
    Returns: Same shape; every mapping becomes a CaseInsensitiveDict.
    """
    if isinstance(value, Mapping):
        return CaseInsensitiveDict({k: indifferent_access(v) for k, v in value.items()})
    if isinstance(value, list):
        return [indifferent_access(v) for v in value]
    return value


def plain(value: Any) -> Any:
    """Does: Undo indifferent_access: turn every mapping back into a plain dict.
    Args: value: a reply from Client.complete (or any nested JSON-like value).
    Returns: Same shape built from dict/list only, safe for json.dumps.
    """
    if isinstance(value, Mapping):
        return {k: plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [plain(v) for v in value]
    return value


def error_message(response: Any) -> str | None:
    """Does: Extract `error.message` from a response if there is one."""
    if not isinstance(response, Mapping):
        return None
    error = response.get("error")
    if not isinstance(error, Mapping):
        return None
    return error.get("message") or None


def validate_completion_response(response: Any, *, streaming: bool) -> Any:
    """Does: Reject error payloads and empty non-streaming responses.
    Args: response: decoded body (or None); streaming: whether a stream was requested.
    Returns: indifferent_access(response) for mappings, the raw value otherwise.
    """
    message = error_message(response)
    if message:
        raise ServerError(message)
    if not streaming and not response:
        raise ServerError(EMPTY_RESPONSE_MESSAGE)
    if isinstance(response, Mapping):
        return indifferent_access(response)
    return response

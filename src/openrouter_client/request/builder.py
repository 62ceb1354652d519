"""
builder.py.
==========

Does: Assemble the JSON body for POST /chat/completions from messages, a model
      (or fallback chain), provider order, transforms, stream flag and extras.
Returns: A plain dict ready for JSON encoding.
Used by: Client.complete.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from openrouter_client.errors import InvalidInputError
from openrouter_client.request.multimodal import normalize_message

COMPLETIONS_PATH = "/chat/completions"
FALLBACK_ROUTE = "fallback"

__all__ = ["COMPLETIONS_PATH", "FALLBACK_ROUTE", "build_completion_request"]


def _apply_model(body: dict[str, Any], model: str | Sequence[str]) -> None:
    if isinstance(model, str):
        body["model"] = model
        return
    if isinstance(model, Sequence) and all(isinstance(m, str) for m in model):
        body["models"] = list(model)
        body["route"] = FALLBACK_ROUTE
        return
    raise InvalidInputError(
        f"model must be a string or a sequence of strings, got {type(model).__name__}"
    )


def build_completion_request(
    messages: Sequence[Mapping[str, Any]],
    model: str | Sequence[str],
    *,
    providers: Sequence[str] | None = None,
    transforms: Sequence[str] | None = None,
    extras: Mapping[str, Any] | None = None,
    stream: Any = None,
) -> dict[str, Any]:
    """Does: Build the completion request body.

    Args:
        messages: chat messages; list-content messages get their image parts inlined.
        model: one model id, or an ordered list of ids tried in turn (route=fallback).
        providers: provider names in priority order, sent as provider.order.
        transforms: prompt transform ids, applied by OpenRouter in order.
        extras: extra top-level keys merged last; they win over everything above.
        stream: any truthy value adds "stream": true (callbacks are never serialized).

    Returns:
        dict body, keys in insertion order: messages, model(s)/route, provider,
        transforms, stream, then extras.
    """
    body: dict[str, Any] = {"messages": [normalize_message(m) for m in messages]}
    _apply_model(body, model)
    if providers:
        body["provider"] = {"order": list(providers)}
    if transforms:
        body["transforms"] = list(transforms)
    if stream:
        body["stream"] = True
    if extras:
        body.update(extras)
    return body

# openrouter_client/types.py
from __future__ import annotations

from typing import Any, Callable, Literal, Protocol, TypedDict, Union, runtime_checkable

"""
types.py.

Does: Define the chat message shapes and the structural transport contract.
Used by: request builder, multimodal normalizer, Client, HTTPTransport.
"""

StreamCallback = Callable[[dict[str, Any]], Any]


class ImageURL(TypedDict, total=False):
    url: str
    detail: Literal["auto", "low", "high"]


class TextPart(TypedDict):
    type: Literal["text"]
    text: str


class ImagePart(TypedDict):
    type: Literal["image_url"]
    image_url: ImageURL


# Unknown part types travel as plain dicts.
ContentPart = Union[TextPart, ImagePart, dict[str, Any]]


class Message(TypedDict, total=False):
    role: str
    name: str
    content: str | list[ContentPart]


@runtime_checkable
class Transport(Protocol):
    """
    Structural contract for anything that can carry requests to OpenRouter.

    Paths are passed without the versioned prefix ("/models", not "/api/v1/models").
    Both calls return the decoded JSON body, or None when there was no body.
    The client only passes a `stream=` keyword to `post` when the caller asked
    for streaming, so two-argument transports work for every other call.
    """

    def get(self, path: str) -> Any: ...
    def post(self, path: str, body: dict[str, Any]) -> Any: ...


@runtime_checkable
class StreamingTransport(Transport, Protocol):
    """Transport that can also feed server-sent-event chunks to a callback."""

    def post(
        self, path: str, body: dict[str, Any], stream: StreamCallback | bool | None = None
    ) -> Any: ...


__all__ = [
    "ContentPart",
    "ImagePart",
    "ImageURL",
    "Message",
    "StreamCallback",
    "StreamingTransport",
    "TextPart",
    "Transport",
]

__docformat__ = "google"

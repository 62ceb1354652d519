"""
errors.py.
=========

Does: Define the exception hierarchy raised by the OpenRouter client.
Used by: Multimodal normalization, request assembly, response validation, config.
Returns: Exception classes only (no side effects).
"""

from __future__ import annotations

__all__ = [
    "OpenRouterError",
    "InvalidInputError",
    "EncodingError",
    "ServerError",
    "ConfigurationError",
]


class OpenRouterError(Exception):
    """Base class for every error raised by this package."""


class InvalidInputError(OpenRouterError, ValueError):
    """Raise when caller input is unusable (missing file, bad format, bad model)."""


class EncodingError(OpenRouterError):
    """Raise when a local image cannot be read or base64-encoded."""


class ServerError(OpenRouterError):
    """Raise when OpenRouter answers with an error payload or nothing at all."""


class ConfigurationError(OpenRouterError):
    """Raise when the client configuration is incomplete or malformed."""


__docformat__ = "google"

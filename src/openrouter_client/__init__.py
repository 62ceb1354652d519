"""
openrouter_client
=================

Does: Root package for the OpenRouter client library.
Returns: Exposes Client, Configuration, the error hierarchy and request helpers
         through a stable namespace.
Used by: All imports starting from `openrouter_client.*`.
Example:
    client = Client(access_token="sk-or-...")
    reply = client.complete([{"role": "user", "content": "Hi"}], "openai/gpt-4o-mini")
"""

from __future__ import annotations

from .client import Client
from .config import Configuration
from .errors import (
    ConfigurationError,
    EncodingError,
    InvalidInputError,
    OpenRouterError,
    ServerError,
)
from .http import HTTPTransport
from .request import build_completion_request, normalize_content_part, plain

__version__ = "0.3.0"

__all__ = [
    "Client",
    "Configuration",
    "ConfigurationError",
    "EncodingError",
    "HTTPTransport",
    "InvalidInputError",
    "OpenRouterError",
    "ServerError",
    "build_completion_request",
    "normalize_content_part",
    "plain",
    "__version__",
]
__docformat__ = "google"

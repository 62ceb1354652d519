"""
request
=======

Does: Expose request assembly, multimodal normalization and response validation.
Returns: Re-exports of stable symbols from `builder`, `multimodal` and `response`.
Used by: Client and callers that want to inspect a request body before sending it.
Example:
    body = build_completion_request([{"role": "user", "content": "hi"}], "openai/gpt-4o")
"""

from __future__ import annotations

# ── Public API re-exports ─────────────────────────────────────────────────────
from .builder import COMPLETIONS_PATH, FALLBACK_ROUTE, build_completion_request
from .multimodal import (
    IMAGE_MIME_TYPES,
    encode_image_file,
    mime_type_for,
    normalize_content_part,
    normalize_message,
)
from .response import (
    EMPTY_RESPONSE_MESSAGE,
    error_message,
    indifferent_access,
    plain,
    validate_completion_response,
)

__all__ = [
    "COMPLETIONS_PATH",
    "EMPTY_RESPONSE_MESSAGE",
    "FALLBACK_ROUTE",
    "IMAGE_MIME_TYPES",
    "build_completion_request",
    "encode_image_file",
    "error_message",
    "indifferent_access",
    "mime_type_for",
    "normalize_content_part",
    "normalize_message",
    "plain",
    "validate_completion_response",
]

# Keep docformat explicit for tooling consistency.
__docformat__ = "google"

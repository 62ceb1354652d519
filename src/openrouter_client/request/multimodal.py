"""
multimodal.py.
=============

Does: Normalize multimodal content parts: pass text and unknown parts through,
      keep inline `data:image/` URLs, and inline local image files as base64 data URLs.
Returns: Normalized content parts / messages; raises InvalidInputError or EncodingError.
Used by: Completion request assembly (request.builder).
"""

from __future__ import annotations

# ── Imports & Typing ─────────────────────────────────────────────────────────
import base64
import logging
import os
from pathlib import Path
from typing import Any

from openrouter_client.errors import EncodingError, InvalidInputError

# ── Logger ───────────────────────────────────────────────────────────────────
logger = logging.getLogger(__name__)

# ── Tables ───────────────────────────────────────────────────────────────────
# Lowercased extension (with dot) → MIME type. The key set is the allow-list.
IMAGE_MIME_TYPES: dict[str, str] = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
    ".tiff": "image/tiff",
    ".tif": "image/tiff",
    ".svg": "image/svg+xml",
}

DATA_IMAGE_PREFIX = "data:image/"
DEFAULT_DETAIL = "auto"

__all__ = [
    "IMAGE_MIME_TYPES",
    "mime_type_for",
    "encode_image_file",
    "normalize_content_part",
    "normalize_message",
]


# ── Pure helpers ─────────────────────────────────────────────────────────────
def mime_type_for(path: str | os.PathLike[str]) -> str | None:
    """Does: Look up the image MIME type for a path by its extension (case-insensitive).
    Args: path: file path or name.
    Returns: MIME string, or None when the extension is not a supported image format.
    """
    return IMAGE_MIME_TYPES.get(Path(path).suffix.lower())


def encode_image_file(path: str | os.PathLike[str]) -> str:
    """Does: Read a local image and return it as a `data:<mime>;base64,<payload>` URL.
    Args: path: local file path; `~` is expanded.
    Returns: Data URL string.
    Raises: InvalidInputError (missing file / unsupported format), EncodingError (I/O).
    """
    raw_path = os.fspath(path)
    file_path = Path(raw_path).expanduser()
    if not raw_path or not file_path.exists():
        raise InvalidInputError(f"File not found: {raw_path}")

    ext = file_path.suffix.lower()
    mime_type = IMAGE_MIME_TYPES.get(ext)
    if mime_type is None:
        raise InvalidInputError(f"Unsupported image format: {ext}")

    try:
        payload = base64.b64encode(file_path.read_bytes()).decode("ascii")
    except OSError as e:
        raise EncodingError(f"Failed to read or encode file: {raw_path} ({e})") from e

    logger.debug("Inlined %s as %s (%d base64 chars)", raw_path, mime_type, len(payload))
    return f"data:{mime_type};base64,{payload}"


# ── Normalizers ──────────────────────────────────────────────────────────────
def normalize_content_part(part: dict[str, Any]) -> dict[str, Any]:
    """Does: Normalize one content part.

    Non-image parts (text or unknown types) and image parts without an
    `image_url` mapping are returned as the very same object. Image parts come
    back as a fresh `{"type": "image_url", "image_url": {"url", "detail"}}`
    dict with `detail` defaulting to "auto".
    """
    if part.get("type") != "image_url":
        return part

    image_url = part.get("image_url")
    if not image_url:
        return part

    url = str(image_url.get("url") or "")
    detail = image_url.get("detail") or DEFAULT_DETAIL

    if not url.startswith(DATA_IMAGE_PREFIX):
        url = encode_image_file(url)

    return {"type": "image_url", "image_url": {"url": url, "detail": detail}}


def normalize_message(message: dict[str, Any]) -> dict[str, Any]:
    """Does: Normalize every part of a list-content message.
    Args: message: {role, name?, content}.
    Returns: The same object for string content; otherwise a new
             {role, name?, content} dict with normalized parts.
    """
    content = message.get("content")
    if not isinstance(content, list):
        return message

    processed: dict[str, Any] = {"role": message["role"]}
    if message.get("name"):
        processed["name"] = message["name"]
    processed["content"] = [normalize_content_part(part) for part in content]
    return processed

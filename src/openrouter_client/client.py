"""
client.py.
=========

Does: Public OpenRouter client: chat completions (multimodal, fallback models,
      provider order, transforms, streaming), model listing and generation stats.
Returns: Validated, case-insensitive response mappings / `data` payloads.
Used by: Library callers.
"""

from __future__ import annotations

# ── Imports & Typing ─────────────────────────────────────────────────────────
import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any, cast
from urllib.parse import quote

from openrouter_client.config import Configuration
from openrouter_client.http import HTTPTransport
from openrouter_client.request.builder import COMPLETIONS_PATH, build_completion_request
from openrouter_client.request.response import validate_completion_response
from openrouter_client.types import StreamCallback, StreamingTransport, Transport

# ── Logger ───────────────────────────────────────────────────────────────────
logger = logging.getLogger(__name__)

MODELS_PATH = "/models"
GENERATION_PATH = "/generation"

__all__ = ["Client"]


class Client:
    """Does: Thin synchronous client for the OpenRouter API.

    Args:
        access_token: bearer token; overrides the configuration's.
        request_timeout: seconds per request; overrides the configuration's.
        uri_base: API root such as "https://openrouter.ai/api".
        extra_headers: headers merged into every request.
        config: base Configuration (default: Configuration.from_env()).
        transport: object with get/post (default: HTTPTransport(config)).
        configure: callable receiving the final Configuration and returning a
            replacement (or None to keep it), run before the transport is built.
    """

    def __init__(
        self,
        access_token: str | None = None,
        request_timeout: float | None = None,
        uri_base: str | None = None,
        extra_headers: Mapping[str, str] | None = None,
        *,
        config: Configuration | None = None,
        transport: Transport | None = None,
        configure: Callable[[Configuration], Configuration | None] | None = None,
    ):
        config = (config or Configuration.from_env()).override(
            access_token=access_token,
            request_timeout=request_timeout,
            uri_base=uri_base,
            extra_headers=extra_headers,
        )
        if configure is not None:
            config = configure(config) or config
        self.config = config
        self.transport: Transport = transport or HTTPTransport(config)

    def complete(
        self,
        messages: Sequence[Mapping[str, Any]],
        model: str | Sequence[str],
        *,
        providers: Sequence[str] | None = None,
        transforms: Sequence[str] | None = None,
        extras: Mapping[str, Any] | None = None,
        stream: StreamCallback | bool | None = None,
    ) -> Any:
        """Does: Run a chat completion.

        Args:
            messages: e.g. [{"role": "user", "content": "What is the meaning of life?"}].
                List content may mix text and image_url parts; local image paths
                are inlined as base64 data URLs.
            model: model id, or a list of ids to fall back through in order.
            providers: provider names ordered by priority.
            transforms: prompt transforms applied in order by OpenRouter.
            extras: model-specific parameters (max_tokens, temperature, ...),
                merged last so they override anything else.
            stream: callback invoked with each streamed chunk, or True to get
                the chunks back as a list.

        Returns:
            The completion as a case-insensitive mapping (None for callback streams).
            Mappings are requests CaseInsensitiveDicts, which json.dumps rejects;
            pass the reply through `openrouter_client.plain()` first to serialize it.

        Raises:
            InvalidInputError, EncodingError: while preparing images or the model.
            ServerError: error payload, or empty response without streaming.
        """
        body = build_completion_request(
            messages,
            model,
            providers=providers,
            transforms=transforms,
            extras=extras,
            stream=stream,
        )
        logger.debug(
            "Completion request: %d message(s), model=%s",
            len(body["messages"]),
            body.get("model") or body.get("models"),
        )
        # plain two-argument transports never see a stream keyword
        if stream:
            streaming = cast(StreamingTransport, self.transport)
            response = streaming.post(COMPLETIONS_PATH, body, stream=stream)
        else:
            response = self.transport.post(COMPLETIONS_PATH, body)
        return validate_completion_response(response, streaming=bool(stream))

    def models(self) -> list[dict[str, Any]]:
        """Does: List the models available on OpenRouter (the `data` array)."""
        return self.transport.get(MODELS_PATH)["data"]

    def query_generation_stats(self, generation_id: str) -> dict[str, Any]:
        """Does: Fetch token counts and cost for a previous generation.
        Args: generation_id: the `id` returned by a completion.
        Returns: The `data` object of GET /generation?id=<id>.
        """
        response = self.transport.get(f"{GENERATION_PATH}?id={quote(str(generation_id), safe='')}")
        return response["data"]

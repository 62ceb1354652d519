"""
http.py.
=======

Does: Carry GET/POST calls to the OpenRouter REST API over a requests.Session:
      versioned URI joining, auth/app headers, timeouts, non-2xx handling and
      server-sent-event streaming.
Returns: Decoded JSON bodies (None for empty bodies and callback streams);
         an error payload inside a stream raises ServerError.
Used by: Client (default transport).
"""

from __future__ import annotations

# ── Imports & Typing ─────────────────────────────────────────────────────────
import json
import logging
from collections.abc import Callable, Iterable
from typing import Any

import requests  # type: ignore[import-untyped]

from openrouter_client.config import Configuration
from openrouter_client.errors import ServerError
from openrouter_client.request.response import error_message
from openrouter_client.types import StreamCallback
from openrouter_client.utils.log import debug, topic_enabled

# ── Logger ───────────────────────────────────────────────────────────────────
logger = logging.getLogger(__name__)

CLIENT_TITLE = "OpenRouter Python Client"
SSE_DATA_PREFIX = "data:"
SSE_DONE = "[DONE]"

__all__ = ["HTTPTransport", "iter_sse_data"]


def iter_sse_data(lines: Iterable[bytes | str]) -> Iterable[dict[str, Any]]:
    """Does: Decode `data: {...}` server-sent-event lines into JSON objects.
    Args: lines: raw lines as yielded by Response.iter_lines().
    Returns: Iterator of decoded chunks; blank lines, comments and [DONE] are skipped.
    """
    for raw in lines:
        line = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        line = line.strip()
        if not line.startswith(SSE_DATA_PREFIX):
            # blank keep-alives and ": OPENROUTER PROCESSING" comments
            continue
        data = line[len(SSE_DATA_PREFIX):].strip()
        if not data or data == SSE_DONE:
            continue
        yield json.loads(data)


class HTTPTransport:
    """Does: Default requests-based transport bound to one Configuration.
    Args: config: Configuration; session: optional requests.Session (tests inject fakes).
    Returns: Instance exposing get(path) and post(path, body, stream=None).
    """

    def __init__(self, config: Configuration, session: requests.Session | None = None):
        self.config = config
        self._session = session or requests.Session()

    # ── Request plumbing ─────────────────────────────────────────────────────
    def uri(self, path: str) -> str:
        """Does: Join uri_base, api_version and path ('/models' -> '.../api/v1/models')."""
        base = self.config.uri_base.rstrip("/")
        version = self.config.api_version.strip("/")
        return f"{base}/{version}/{path.lstrip('/')}"

    def headers(self) -> dict[str, str]:
        """Does: Build auth/content/app headers, extra_headers winning on conflicts."""
        return {
            "Authorization": f"Bearer {self.config.require_access_token()}",
            "Content-Type": "application/json",
            "X-Title": CLIENT_TITLE,
            **self.config.extra_headers,
        }

    def _check(self, response: requests.Response) -> None:
        if response.status_code >= 400 and self.config.log_errors:
            logger.error("OpenRouter HTTP %s: %s", response.status_code, response.text)
        response.raise_for_status()

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        if not response.content:
            return None
        return response.json()

    # ── Verbs ────────────────────────────────────────────────────────────────
    def get(self, path: str) -> Any:
        url = self.uri(path)
        headers = self.headers()
        debug(f"GET {url} headers={headers}", topic="http")
        response = self._session.get(url, headers=headers, timeout=self.config.request_timeout)
        debug(f"GET {url} -> {response.status_code}", topic="http")
        self._check(response)
        return self._decode(response)

    def post(
        self,
        path: str,
        body: dict[str, Any],
        stream: StreamCallback | bool | None = None,
    ) -> Any:
        """Does: POST a JSON body; with `stream` set, read the reply as server-sent events.
        Args: path: unversioned path; body: JSON-able dict;
              stream: callback fed each decoded chunk, or True to collect them.
        Returns: Decoded body; None for callback streams; list of chunks for stream=True.
        """
        url = self.uri(path)
        headers = self.headers()
        if stream:
            body = {**body, "stream": True}
        if topic_enabled("http"):
            debug(f"POST {url} headers={headers} body={json.dumps(body)[:2000]}", topic="http")

        response = self._session.post(
            url,
            headers=headers,
            json=body,
            timeout=self.config.request_timeout,
            stream=bool(stream),
        )
        debug(f"POST {url} -> {response.status_code}", topic="http")
        if not stream:
            self._check(response)
            return self._decode(response)

        callback: Callable[[dict[str, Any]], Any] | None = stream if callable(stream) else None
        collected: list[dict[str, Any]] = []
        try:
            self._check(response)
            for chunk in iter_sse_data(response.iter_lines()):
                debug(f"chunk {chunk}", topic="stream")
                message = error_message(chunk)
                if message:
                    raise ServerError(message)
                if callback is not None:
                    callback(chunk)
                else:
                    collected.append(chunk)
        finally:
            response.close()
        return None if callback is not None else collected

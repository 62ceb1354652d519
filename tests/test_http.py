# tests/test_http.py
import json
import logging

import pytest
import requests

from openrouter_client.config import Configuration
from openrouter_client.errors import ConfigurationError, ServerError
from openrouter_client.http import HTTPTransport, iter_sse_data


# ── Dummies ───────────────────────────────────────────────────────────────────
class DummyResponse:
    def __init__(self, status_code=200, json_data=None, lines=None, content=None):
        self.status_code = status_code
        self._json = json_data
        self._lines = lines or []
        if content is None:
            content = json.dumps(json_data).encode() if json_data is not None else b""
        self.content = content
        self.text = content.decode()
        self.closed = False

    def json(self):
        return self._json

    def iter_lines(self):
        return iter(self._lines)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def close(self):
        self.closed = True


class DummySession:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def get(self, url, headers, timeout):
        self.calls.append(("GET", url, headers, timeout, None))
        return self.response

    def post(self, url, headers, json, timeout, stream):
        self.calls.append(("POST", url, headers, timeout, json, stream))
        return self.response


def _transport(response, **config):
    config.setdefault("access_token", "sk-test")
    session = DummySession(response)
    return HTTPTransport(Configuration(**config), session=session), session


# ── URI & headers ─────────────────────────────────────────────────────────────
def test_case_01_uri_joins_base_version_and_path():
    transport, _ = _transport(DummyResponse())
    assert transport.uri("/chat/completions") == "https://openrouter.ai/api/v1/chat/completions"
    assert transport.uri("models") == "https://openrouter.ai/api/v1/models"


def test_case_02_uri_tolerates_trailing_slashes():
    transport, _ = _transport(DummyResponse(), uri_base="http://localhost:8000/api/", api_version="/v2/")
    assert transport.uri("/generation?id=g1") == "http://localhost:8000/api/v2/generation?id=g1"


def test_case_03_headers_carry_bearer_and_extra_headers_win():
    transport, _ = _transport(
        DummyResponse(), extra_headers={"X-Title": "My App", "HTTP-Referer": "https://example.test"}
    )
    headers = transport.headers()
    assert headers["Authorization"] == "Bearer sk-test"
    assert headers["Content-Type"] == "application/json"
    assert headers["X-Title"] == "My App"
    assert headers["HTTP-Referer"] == "https://example.test"


def test_case_04_missing_token_fails_before_any_request():
    session = DummySession(DummyResponse())
    transport = HTTPTransport(Configuration(), session=session)
    with pytest.raises(ConfigurationError, match="access token missing"):
        transport.get("/models")
    assert session.calls == []


# ── GET / POST ────────────────────────────────────────────────────────────────
def test_case_05_get_decodes_json_and_uses_timeout():
    transport, session = _transport(DummyResponse(json_data={"data": []}), request_timeout=7)
    assert transport.get("/models") == {"data": []}
    method, url, _headers, timeout, _ = session.calls[0]
    assert (method, url, timeout) == ("GET", "https://openrouter.ai/api/v1/models", 7)


def test_case_06_post_sends_json_body_without_streaming():
    transport, session = _transport(DummyResponse(json_data={"id": "x"}))
    body = {"messages": [], "model": "m"}
    assert transport.post("/chat/completions", body) == {"id": "x"}
    _, _, _, _, sent, stream = session.calls[0]
    assert sent == body
    assert stream is False


def test_case_07_empty_body_decodes_to_none():
    transport, _ = _transport(DummyResponse(content=b""))
    assert transport.post("/chat/completions", {"model": "m"}) is None


def test_case_08_http_error_propagates(caplog):
    transport, _ = _transport(DummyResponse(status_code=401, json_data={"error": {"message": "no"}}))
    with pytest.raises(requests.HTTPError):
        transport.get("/models")
    assert not [r for r in caplog.records if r.levelno >= logging.ERROR]


def test_case_09_http_error_is_logged_when_log_errors_is_on(caplog):
    transport, _ = _transport(
        DummyResponse(status_code=500, json_data={"error": {"message": "down"}}), log_errors=True
    )
    with caplog.at_level(logging.ERROR, logger="openrouter_client.http"):
        with pytest.raises(requests.HTTPError):
            transport.post("/chat/completions", {"model": "m"})
    assert any("down" in r.getMessage() for r in caplog.records)


# ── Streaming ─────────────────────────────────────────────────────────────────
SSE_LINES = [
    b": OPENROUTER PROCESSING",
    b"",
    b'data: {"choices":[{"delta":{"content":"PO"}}]}',
    b'data: {"choices":[{"delta":{"content":"NG"}}]}',
    b"data: [DONE]",
]


def test_case_10_stream_callback_receives_each_chunk():
    response = DummyResponse(lines=SSE_LINES, content=b"")
    transport, session = _transport(response)
    received = []

    out = transport.post("/chat/completions", {"model": "m"}, stream=received.append)

    assert out is None
    assert "".join(c["choices"][0]["delta"]["content"] for c in received) == "PONG"
    _, _, _, _, sent, stream = session.calls[0]
    assert sent["stream"] is True and stream is True
    assert response.closed is True


def test_case_11_stream_flag_collects_chunks():
    transport, _ = _transport(DummyResponse(lines=SSE_LINES, content=b""))
    chunks = transport.post("/chat/completions", {"model": "m"}, stream=True)
    assert len(chunks) == 2


def test_case_12_iter_sse_data_accepts_text_lines():
    lines = ["data:{\"a\": 1}", "event: ping", "data: [DONE]"]
    assert list(iter_sse_data(lines)) == [{"a": 1}]


def test_case_13_streamed_response_is_closed_on_http_error():
    response = DummyResponse(status_code=500, json_data={"error": {"message": "down"}})
    transport, _ = _transport(response)
    with pytest.raises(requests.HTTPError):
        transport.post("/chat/completions", {"model": "m"}, stream=lambda chunk: None)
    assert response.closed is True


def test_case_14_error_chunk_mid_stream_raises_server_error():
    lines = [
        b'data: {"choices":[{"delta":{"content":"PO"}}]}',
        b'data: {"error":{"message":"provider overloaded","code":502}}',
        b'data: {"choices":[{"delta":{"content":"NG"}}]}',
    ]
    response = DummyResponse(lines=lines, content=b"")
    transport, _ = _transport(response)
    received = []

    with pytest.raises(ServerError, match="provider overloaded"):
        transport.post("/chat/completions", {"model": "m"}, stream=received.append)

    assert len(received) == 1
    assert response.closed is True

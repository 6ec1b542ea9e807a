"""Contract conformance tests run against every registered adapter.

Covers:
- Empty API key or base URL fails fast with ``ProviderConfigError`` and no
  request is sent (fake transport and a real ``httpx`` mock transport).
- Clean streams return the concatenated deltas for every chunk split point;
  progress sees each increment once.
- A raising progress callback never ends the call early.
- Vendor HTTP errors after output return the partial text.
- Vendor HTTP errors before output raise ``"{code}: {message}"``.
- Non-streaming calls deliver the full text to ``on_progress`` once.
- ``test_connection`` success report format and non-streaming request.
- ``test_connection`` failures carry the exact request and response.
"""
from __future__ import annotations

import json

import httpx
import pytest

from papergate_providers.base.errors import (
    ConnectivityTestError,
    ErrorCode,
    ProviderConfigError,
    VendorResponseError,
)
from papergate_providers.base.factory import ProviderFactory
from papergate_providers.base.http import HttpxTransport, TransportChunk, TransportResponse
from papergate_providers.base.interfaces import LLMProvider
from papergate_providers.base.models import ConversationMessage
from papergate_providers.tests.utils import (
    PROVIDER_IDS,
    FakeTransport,
    connectivity_body,
    make_config,
    ok_chunks,
    two_delta_stream,
)

_DOC = "UEFQRVI="  # base64 of "PAPER"
_ERROR_BODY = json.dumps({"error": {"code": "overloaded", "message": "busy right now"}})


def _adapter(provider_id, transport):
    return ProviderFactory.create(provider_id, transport=transport)


@pytest.mark.parametrize("provider_id", PROVIDER_IDS)
def test_adapter_satisfies_protocol(provider_id):
    adapter = _adapter(provider_id, FakeTransport())
    assert isinstance(adapter, LLMProvider)  # nosec B101
    assert adapter.provider_id == provider_id  # nosec B101
    assert adapter.default_model()  # nosec B101


@pytest.mark.parametrize("provider_id", PROVIDER_IDS)
@pytest.mark.parametrize("missing", ["api_key", "base_url"])
def test_missing_connection_field_fails_before_any_request(provider_id, missing):
    transport = FakeTransport()
    adapter = _adapter(provider_id, transport)
    config = make_config(provider_id, **{missing: ""})
    with pytest.raises(ProviderConfigError) as ei:
        adapter.summarize(_DOC, True, "Summarize", config)
    assert ei.value.code is ErrorCode.CONFIG  # nosec B101
    with pytest.raises(ProviderConfigError):
        adapter.chat(_DOC, True, [ConversationMessage(role="user", content="Hi")], config)
    with pytest.raises(ProviderConfigError):
        adapter.test_connection(config)
    assert transport.requests == []  # nosec B101


@pytest.mark.parametrize("provider_id", PROVIDER_IDS)
def test_missing_key_never_reaches_httpx(provider_id):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, text="{}")

    client = httpx.Client(transport=httpx.MockTransport(handler))
    adapter = _adapter(provider_id, HttpxTransport(client=client))
    with pytest.raises(ProviderConfigError):
        adapter.summarize("text", False, "Summarize", make_config(provider_id, api_key=""))
    assert calls == []  # nosec B101


@pytest.mark.parametrize("provider_id", PROVIDER_IDS)
def test_clean_stream_returns_concatenated_deltas(provider_id):
    body = two_delta_stream(provider_id)
    transport = FakeTransport(chunks=ok_chunks(body[:17], body[17:]))
    received = []
    text = _adapter(provider_id, transport).summarize(
        _DOC, True, "Summarize", make_config(provider_id), received.append
    )
    assert text == "AB"  # nosec B101
    assert received == ["A", "B"]  # nosec B101
    assert transport.requests[0].streaming  # nosec B101


@pytest.mark.parametrize("provider_id", PROVIDER_IDS)
def test_http_error_after_output_returns_partial(provider_id):
    transport = FakeTransport(
        chunks=ok_chunks(two_delta_stream(provider_id)) + [TransportChunk(status=500, text=_ERROR_BODY)]
    )
    text = _adapter(provider_id, transport).summarize(_DOC, True, "Summarize", make_config(provider_id))
    assert text == "AB"  # nosec B101


@pytest.mark.parametrize("provider_id", PROVIDER_IDS)
def test_chat_partial_after_network_failure(provider_id):
    transport = FakeTransport(
        chunks=ok_chunks(two_delta_stream(provider_id)), raise_after=httpx.ReadError("reset by peer")
    )
    conversation = [
        ConversationMessage(role="user", content="What is this paper about?"),
        ConversationMessage(role="assistant", content="Streams."),
        ConversationMessage(role="user", content="And the method?"),
    ]
    text = _adapter(provider_id, transport).chat(_DOC, True, conversation, make_config(provider_id))
    assert text == "AB"  # nosec B101


@pytest.mark.parametrize("provider_id", PROVIDER_IDS)
def test_http_error_before_output_raises_vendor_message(provider_id):
    transport = FakeTransport(chunks=[TransportChunk(status=503, text=_ERROR_BODY)])
    with pytest.raises(VendorResponseError) as ei:
        _adapter(provider_id, transport).summarize(_DOC, True, "Summarize", make_config(provider_id))
    err = ei.value
    assert err.provider == provider_id  # nosec B101
    assert err.status == 503  # nosec B101
    assert err.code is ErrorCode.UNAVAILABLE  # nosec B101
    assert err.message == "overloaded: busy right now"  # nosec B101


@pytest.mark.parametrize("provider_id", PROVIDER_IDS)
def test_blocking_call_reports_full_text_once(provider_id):
    transport = FakeTransport(response=TransportResponse(200, connectivity_body(provider_id, "full answer")))
    received = []
    text = _adapter(provider_id, transport).summarize(
        _DOC, True, "Summarize", make_config(provider_id, stream=False), received.append
    )
    assert text == "full answer"  # nosec B101
    assert received == ["full answer"]  # nosec B101
    assert transport.requests[0].streaming is False  # nosec B101


@pytest.mark.parametrize("provider_id", PROVIDER_IDS)
def test_blocking_call_http_error_raises(provider_id):
    transport = FakeTransport(response=TransportResponse(401, _ERROR_BODY))
    with pytest.raises(VendorResponseError) as ei:
        _adapter(provider_id, transport).summarize(_DOC, True, "Summarize", make_config(provider_id, stream=False))
    assert ei.value.code is ErrorCode.AUTH  # nosec B101


@pytest.mark.parametrize("provider_id", PROVIDER_IDS)
def test_connection_success_report(provider_id):
    body = connectivity_body(provider_id, "OK")
    transport = FakeTransport(response=TransportResponse(200, body))
    report = _adapter(provider_id, transport).test_connection(make_config(provider_id))
    assert report == f"Connection OK\nModel: unit-model\nReply: OK\n\n--- Raw response ---\n{body}"  # nosec B101
    request = transport.requests[0]
    assert request.streaming is False  # nosec B101
    assert "stream" not in request.json or request.json["stream"] is False  # nosec B101


@pytest.mark.parametrize("provider_id", PROVIDER_IDS)
def test_connection_failure_carries_diagnostics(provider_id):
    body = json.dumps({"error": {"code": "invalid_api_key", "message": "bad key"}})
    transport = FakeTransport(response=TransportResponse(401, body, {"x-request-id": "req-1"}))
    with pytest.raises(ConnectivityTestError) as ei:
        _adapter(provider_id, transport).test_connection(make_config(provider_id))
    err = ei.value
    request = transport.requests[0]
    assert err.code is ErrorCode.AUTH  # nosec B101
    assert err.request_url == request.url  # nosec B101
    assert err.request_body == request.body  # nosec B101
    assert err.response_body == body  # nosec B101
    assert err.response_headers["x-request-id"] == "req-1"  # nosec B101
    assert err.diagnostics.status == 401  # nosec B101
    assert err.error_name == "invalid_api_key"  # nosec B101


@pytest.mark.parametrize("provider_id", PROVIDER_IDS)
def test_connection_failure_without_envelope_uses_status_name(provider_id):
    transport = FakeTransport(response=TransportResponse(502, "<html>bad gateway</html>"))
    with pytest.raises(ConnectivityTestError) as ei:
        _adapter(provider_id, transport).test_connection(make_config(provider_id))
    assert ei.value.error_name == "HTTP_502"  # nosec B101
    assert ei.value.code is ErrorCode.TRANSIENT  # nosec B101


@pytest.mark.parametrize("provider_id", PROVIDER_IDS)
def test_connection_network_failure(provider_id):
    transport = FakeTransport(post_error=httpx.ConnectError("name resolution failed"))
    with pytest.raises(ConnectivityTestError) as ei:
        _adapter(provider_id, transport).test_connection(make_config(provider_id))
    err = ei.value
    assert err.error_name == "NetworkError"  # nosec B101
    assert err.code is ErrorCode.NETWORK  # nosec B101
    assert err.request_url == transport.requests[0].url  # nosec B101
    assert err.diagnostics.to_dict()["status"] is None  # nosec B101


def test_connection_timeout_is_named_timeout():
    transport = FakeTransport(post_error=httpx.ReadTimeout("slow"))
    with pytest.raises(ConnectivityTestError) as ei:
        _adapter("openai", transport).test_connection(make_config("openai"))
    assert ei.value.error_name == "Timeout"  # nosec B101
    assert ei.value.code is ErrorCode.TIMEOUT  # nosec B101


def test_streaming_through_httpx_mock_transport():
    body = two_delta_stream("openai-compat") + "data: [DONE]\n\n"
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, headers={"content-type": "text/event-stream"}, content=body.encode("utf-8"))

    client = httpx.Client(transport=httpx.MockTransport(handler))
    adapter = _adapter("openai-compat", HttpxTransport(client=client))
    assert adapter.summarize("paper text", False, "Summarize", make_config("openai-compat")) == "AB"  # nosec B101
    assert seen[0]["stream"] is True  # nosec B101


def test_http_error_through_httpx_mock_transport():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={"error": {"code": "rate_limit_exceeded", "message": "slow down"}})

    client = httpx.Client(transport=httpx.MockTransport(handler))
    adapter = _adapter("openai-compat", HttpxTransport(client=client))
    with pytest.raises(VendorResponseError) as ei:
        adapter.summarize("paper text", False, "Summarize", make_config("openai-compat"))
    assert ei.value.status == 429  # nosec B101
    assert ei.value.code is ErrorCode.RATE_LIMIT  # nosec B101
    assert ei.value.message == "rate_limit_exceeded: slow down"  # nosec B101


def _split_cases():
    cases = []
    for provider_id in PROVIDER_IDS:
        body = two_delta_stream(provider_id)
        cases.extend((provider_id, body, at) for at in range(1, len(body)))
    # gemini has no sentinel; the last record may arrive without a newline
    tail = two_delta_stream("gemini").rstrip("\n")
    cases.extend(("gemini", tail, at) for at in range(1, len(tail), 5))
    return cases


@pytest.mark.parametrize("provider_id", PROVIDER_IDS)
def test_every_split_point_yields_same_text(provider_id):
    for pid, body, at in _split_cases():
        if pid != provider_id:
            continue
        transport = FakeTransport(chunks=ok_chunks(body[:at], body[at:]))
        received = []
        text = _adapter(provider_id, transport).summarize(
            _DOC, True, "Summarize", make_config(provider_id), received.append
        )
        assert text == "AB", (provider_id, at)  # nosec B101
        assert "".join(received) == "AB", (provider_id, at)  # nosec B101


def _raising_callback(delta):
    raise RuntimeError("ui closed")


@pytest.mark.parametrize("provider_id", PROVIDER_IDS)
def test_raising_callback_keeps_streaming(provider_id):
    transport = FakeTransport(chunks=ok_chunks(two_delta_stream(provider_id)))
    text = _adapter(provider_id, transport).summarize(
        _DOC, True, "Summarize", make_config(provider_id), _raising_callback
    )
    assert text == "AB"  # nosec B101


@pytest.mark.parametrize("provider_id", PROVIDER_IDS)
def test_raising_callback_on_blocking_call(provider_id, log_records):
    transport = FakeTransport(response=TransportResponse(200, connectivity_body(provider_id, "full answer")))
    text = _adapter(provider_id, transport).summarize(
        _DOC, True, "Summarize", make_config(provider_id, stream=False), _raising_callback
    )
    assert text == "full answer"  # nosec B101
    events = [e for e in log_records.events() if e.get("event") == "stream.callback_error"]
    assert events and events[0]["error"] == "RuntimeError: ui closed"  # nosec B101

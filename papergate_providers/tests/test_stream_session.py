"""Tests for ``StreamSession`` and the partial-result policy.

Covers:
- Clean completion returns the accumulated text.
- HTTP error after deltas returns the partial text under ``FALLBACK``.
- HTTP error with no deltas raises the vendor error (``"{code}: {message}"``).
- ``ALWAYS_FATAL`` raises even when deltas arrived.
- Transport failures map to ``NETWORK`` / ``TIMEOUT``.
- In-band error events abort like an HTTP error.
- Lifecycle events carry the normalized keys.
- A raising progress callback still completes cleanly with the full text.
"""
from __future__ import annotations

import json

import httpx
import pytest

from papergate_providers.base.errors import ErrorCode, ProviderError, VendorResponseError
from papergate_providers.base.http import TransportChunk
from papergate_providers.base.logging import REQUIRED_NORMALIZED_KEYS, get_logger
from papergate_providers.base.openai_style_parts import CHAT_COMPLETIONS_DIALECT, RESPONSES_DIALECT
from papergate_providers.base.streaming import (
    PartialResultPolicy,
    StreamSession,
    settle_stream_result,
)
from papergate_providers.tests.utils import FakeTransport, ok_chunks, sse

_AB = sse({"choices": [{"delta": {"content": "A"}}]}, {"choices": [{"delta": {"content": "B"}}]})
_ERROR_BODY = json.dumps({"error": {"code": "server_error", "message": "upstream exploded"}})


def _session(transport, *, policy=PartialResultPolicy.FALLBACK, dialect=CHAT_COMPLETIONS_DIALECT, progress=None):
    return StreamSession(
        transport=transport,
        dialect=dialect,
        provider="unit",
        model="m",
        timeout_ms=30_000,
        on_progress=progress,
        policy=policy,
        logger=get_logger("unit.session"),
    )


def _run(session):
    return session.run("https://unit.test/stream", headers={"Content-Type": "application/json"}, body="{}")


def test_clean_completion_returns_text():
    received = []
    transport = FakeTransport(chunks=ok_chunks(_AB[:30], _AB[30:], "data: [DONE]\n\n"))
    assert _run(_session(transport, progress=received.append)) == "AB"  # nosec B101
    assert received == ["A", "B"]  # nosec B101
    assert transport.requests[0].streaming  # nosec B101


def test_http_error_after_deltas_returns_partial():
    transport = FakeTransport(chunks=ok_chunks(_AB) + [TransportChunk(status=500, text=_ERROR_BODY)])
    assert _run(_session(transport)) == "AB"  # nosec B101


def test_http_error_without_deltas_raises_vendor_error():
    transport = FakeTransport(chunks=[TransportChunk(status=500, text=_ERROR_BODY)])
    with pytest.raises(VendorResponseError) as ei:
        _run(_session(transport))
    err = ei.value
    assert err.status == 500  # nosec B101
    assert err.code is ErrorCode.SERVER_ERROR  # nosec B101
    assert err.message == "server_error: upstream exploded"  # nosec B101
    assert err.retryable  # nosec B101


def test_http_error_without_envelope_message_uses_status_text():
    transport = FakeTransport(chunks=[TransportChunk(status=429, text="")])
    with pytest.raises(VendorResponseError) as ei:
        _run(_session(transport))
    assert ei.value.code is ErrorCode.RATE_LIMIT  # nosec B101
    assert ei.value.message == "HTTP 429: request failed"  # nosec B101


def test_always_fatal_raises_despite_deltas():
    transport = FakeTransport(chunks=ok_chunks(_AB) + [TransportChunk(status=503, text=_ERROR_BODY)])
    with pytest.raises(VendorResponseError) as ei:
        _run(_session(transport, policy=PartialResultPolicy.ALWAYS_FATAL))
    assert ei.value.code is ErrorCode.UNAVAILABLE  # nosec B101


def test_network_failure_after_deltas_returns_partial():
    transport = FakeTransport(chunks=ok_chunks(_AB), raise_after=httpx.ReadError("connection reset"))
    assert _run(_session(transport)) == "AB"  # nosec B101


def test_network_failure_without_deltas_raises_network_error():
    transport = FakeTransport(raise_after=httpx.ConnectError("refused"))
    with pytest.raises(ProviderError) as ei:
        _run(_session(transport))
    assert ei.value.code is ErrorCode.NETWORK  # nosec B101
    assert ei.value.message.startswith("NetworkError")  # nosec B101


def test_timeout_without_deltas_raises_timeout():
    transport = FakeTransport(raise_after=httpx.ReadTimeout("slow"))
    with pytest.raises(ProviderError) as ei:
        _run(_session(transport))
    assert ei.value.code is ErrorCode.TIMEOUT  # nosec B101
    assert "30000 ms" in ei.value.message  # nosec B101


def test_in_band_error_event_aborts():
    body = sse({"type": "error", "code": "rate_limit_exceeded", "message": "slow down"})
    transport = FakeTransport(chunks=ok_chunks(body))
    with pytest.raises(VendorResponseError) as ei:
        _run(_session(transport, dialect=RESPONSES_DIALECT))
    err = ei.value
    assert err.status is None  # nosec B101
    assert err.vendor_code == "rate_limit_exceeded"  # nosec B101
    assert err.message == "rate_limit_exceeded: slow down"  # nosec B101


def test_in_band_error_after_deltas_returns_partial():
    body = sse(
        {"type": "response.output_text.delta", "delta": "A"},
        {"type": "response.failed", "response": {"error": {"code": "server_error", "message": "x"}}},
    )
    transport = FakeTransport(chunks=ok_chunks(body))
    assert _run(_session(transport, dialect=RESPONSES_DIALECT)) == "A"  # nosec B101


def test_empty_stream_returns_empty_text():
    transport = FakeTransport(chunks=ok_chunks("data: [DONE]\n\n"))
    assert _run(_session(transport)) == ""  # nosec B101


def test_lifecycle_events_carry_normalized_keys(log_records):
    transport = FakeTransport(chunks=ok_chunks(_AB) + [TransportChunk(status=500, text=_ERROR_BODY)])
    _run(_session(transport))
    events = {e["event"]: e for e in log_records.events()}
    assert "stream.start" in events  # nosec B101
    partial = events["stream.partial"]
    for key in ("phase", "attempt", "emitted", "tokens"):
        assert key in partial  # nosec B101
    assert set(REQUIRED_NORMALIZED_KEYS) - set(partial) <= {"error_code"}  # nosec B101
    assert partial["error_code"] == "server_error"  # nosec B101
    assert partial["emitted"] is True  # nosec B101
    assert partial["deltas"] == 2  # nosec B101


def test_settle_prefers_abort_error_over_transport_error():
    abort = ProviderError(code=ErrorCode.RATE_LIMIT, message="abort", provider="p")
    transport = ProviderError(code=ErrorCode.NETWORK, message="net", provider="p")
    with pytest.raises(ProviderError) as ei:
        settle_stream_result(
            policy=PartialResultPolicy.FALLBACK,
            text="",
            received_any_delta=False,
            abort_error=abort,
            transport_error=transport,
        )
    assert ei.value is abort  # nosec B101


def test_settle_clean_completion_ignores_policy():
    assert (  # nosec B101
        settle_stream_result(policy=PartialResultPolicy.ALWAYS_FATAL, text="t", received_any_delta=True) == "t"
    )


def test_raising_callback_completes_with_full_text(log_records):
    def on_progress(delta):
        raise RuntimeError("ui closed")

    transport = FakeTransport(chunks=ok_chunks(_AB, "data: [DONE]\n\n"))
    assert _run(_session(transport, progress=on_progress)) == "AB"  # nosec B101
    events = {e["event"]: e for e in log_records.events()}
    assert "stream.callback_error" in events  # nosec B101
    assert events["stream.end"]["callback_errors"] == 2  # nosec B101
    assert "stream.abort" not in events  # nosec B101

"""Error taxonomy and vendor envelope tests.

Covers:
- ``classify_status`` mapping, including unmapped 5xx and 4xx.
- ``classify_exception`` for httpx timeouts and transport failures.
- ``parse_error_envelope`` across vendor shapes and non-JSON bodies.
- ``format_vendor_message`` fallbacks.
- ``VendorResponseError`` classification without a status.
"""
from __future__ import annotations

import httpx
import pytest

from papergate_providers.base.errors import (
    ErrorCode,
    ProviderError,
    VendorResponseError,
    classify_exception,
    classify_status,
    format_vendor_message,
    parse_error_envelope,
)


@pytest.mark.parametrize(
    "status, code",
    [
        (400, ErrorCode.VALIDATION),
        (401, ErrorCode.AUTH),
        (403, ErrorCode.AUTH),
        (404, ErrorCode.NOT_FOUND),
        (408, ErrorCode.TIMEOUT),
        (429, ErrorCode.RATE_LIMIT),
        (500, ErrorCode.SERVER_ERROR),
        (502, ErrorCode.TRANSIENT),
        (503, ErrorCode.UNAVAILABLE),
        (504, ErrorCode.TIMEOUT),
        (529, ErrorCode.SERVER_ERROR),
        (418, ErrorCode.UNKNOWN),
    ],
)
def test_classify_status(status, code):
    assert classify_status(status) is code  # nosec B101


def test_classify_exception_variants():
    assert classify_exception(httpx.ConnectTimeout("t")) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(TimeoutError()) is ErrorCode.TIMEOUT  # nosec B101
    assert classify_exception(httpx.ConnectError("refused")) is ErrorCode.NETWORK  # nosec B101
    assert classify_exception(RuntimeError("quota exhausted")) is ErrorCode.RATE_LIMIT  # nosec B101
    assert classify_exception(RuntimeError("???")) is ErrorCode.UNKNOWN  # nosec B101
    err = ProviderError(code=ErrorCode.AUTH, message="x", provider="p")
    assert classify_exception(err) is ErrorCode.AUTH  # nosec B101


@pytest.mark.parametrize(
    "body, fields, expected",
    [
        ('{"error": {"message": "bad", "type": "invalid_request_error", "code": "bad_model"}}', None,
         ("bad_model", "bad")),
        ('{"type": "error", "error": {"type": "overloaded_error", "message": "busy"}}', ("type", "code"),
         ("overloaded_error", "busy")),
        ('[{"error": {"code": 403, "message": "denied", "status": "PERMISSION_DENIED"}}]', ("code", "status"),
         ("403", "denied")),
        ('{"error": "plain string"}', None, (None, "plain string")),
        ("upstream connect error", None, (None, "upstream connect error")),
        ("", None, (None, None)),
    ],
)
def test_parse_error_envelope(body, fields, expected):
    result = parse_error_envelope(body) if fields is None else parse_error_envelope(body, fields)
    assert result == expected  # nosec B101


def test_format_vendor_message_fallbacks():
    assert format_vendor_message("code", "msg", 400) == "code: msg"  # nosec B101
    assert format_vendor_message(None, None, 502) == "HTTP 502: request failed"  # nosec B101
    assert format_vendor_message(None, "msg", 502) == "HTTP 502: msg"  # nosec B101
    assert format_vendor_message(None, "msg", None) == "msg"  # nosec B101


def test_vendor_error_without_status_uses_heuristic():
    err = VendorResponseError(provider="p", vendor_code="rate_limit_exceeded", message="slow down")
    assert err.code is ErrorCode.RATE_LIMIT  # nosec B101
    assert err.retryable is False  # nosec B101
    fallback = VendorResponseError(provider="p", message="something odd")
    assert fallback.code is ErrorCode.SERVER_ERROR  # nosec B101


def test_provider_error_str():
    err = ProviderError(code=ErrorCode.CONFIG, message="no key", provider="openai")
    assert str(err) == "openai:- config: no key"  # nosec B101

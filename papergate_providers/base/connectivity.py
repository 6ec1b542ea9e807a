"""Connectivity-test report and diagnostics builders.

A connectivity test never uses the partial-result fallback: any failure is
turned into a :class:`ConnectivityTestError` whose diagnostics hold the exact
request (URL and serialized body) and whatever response arrived.
"""
from __future__ import annotations

from typing import Optional, Sequence

from .constants import NETWORK_ERROR_NAME, TIMEOUT_ERROR_NAME
from .errors import (
    DEFAULT_CODE_FIELDS,
    ConnectivityDiagnostics,
    ErrorCode,
    classify_exception,
    parse_error_envelope,
)
from .http.transport import TransportResponse


def format_connectivity_report(model: str, reply: str, raw_body: str) -> str:
    """Human-readable success report shown to operators."""
    return (
        "Connection OK\n"
        f"Model: {model}\n"
        f"Reply: {reply}\n"
        "\n--- Raw response ---\n"
        f"{raw_body}"
    )


def diagnostics_from_response(
    response: TransportResponse,
    *,
    request_url: str,
    request_body: str,
    code_fields: Sequence[str] = DEFAULT_CODE_FIELDS,
) -> ConnectivityDiagnostics:
    """Diagnostics for a non-2xx response.

    The error name is the vendor code when the envelope parses, else
    ``HTTP_<status>``.
    """
    vendor_code, message = parse_error_envelope(response.text, code_fields)
    return ConnectivityDiagnostics(
        error_name=vendor_code or f"HTTP_{response.status}",
        message=message or f"HTTP {response.status}: request failed",
        status=response.status,
        request_url=request_url,
        request_body=request_body,
        response_headers=response.headers,
        response_body=response.text,
    )


def diagnostics_from_exception(
    exc: Exception, *, request_url: str, request_body: str, timeout_ms: Optional[int] = None
) -> ConnectivityDiagnostics:
    """Diagnostics for a request that never produced a response."""
    if classify_exception(exc) is ErrorCode.TIMEOUT:
        name = TIMEOUT_ERROR_NAME
        message = f"request exceeded {timeout_ms} ms" if timeout_ms else "request timed out"
    else:
        name = NETWORK_ERROR_NAME
        message = str(exc) or "connection failed"
    return ConnectivityDiagnostics(
        error_name=name,
        message=message,
        request_url=request_url,
        request_body=request_body,
    )


__all__ = [
    "format_connectivity_report",
    "diagnostics_from_response",
    "diagnostics_from_exception",
]

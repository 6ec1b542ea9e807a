"""Base shared constants for the gateway.

Central location to avoid scattering magic strings and default numbers.

Security
--------
This module contains only generic sentinel strings and numeric defaults.
There are no credentials or tokens embedded.
"""
from __future__ import annotations

# Request timeout defaults (milliseconds)
DEFAULT_REQUEST_TIMEOUT_MS = 300_000
MIN_REQUEST_TIMEOUT_MS = 30_000
CONNECTIVITY_TEST_TIMEOUT_MS = 30_000

# SSE framing shared by every supported vendor
SSE_DATA_PREFIX = "data:"
SSE_DONE_SENTINEL = "[DONE]"

# Error names used in connectivity diagnostics when no vendor code is known
NETWORK_ERROR_NAME = "NetworkError"
TIMEOUT_ERROR_NAME = "Timeout"

PDF_MIME_TYPE = "application/pdf"

__all__ = [
    "DEFAULT_REQUEST_TIMEOUT_MS",
    "MIN_REQUEST_TIMEOUT_MS",
    "CONNECTIVITY_TEST_TIMEOUT_MS",
    "SSE_DATA_PREFIX",
    "SSE_DONE_SENTINEL",
    "NETWORK_ERROR_NAME",
    "TIMEOUT_ERROR_NAME",
    "PDF_MIME_TYPE",
]

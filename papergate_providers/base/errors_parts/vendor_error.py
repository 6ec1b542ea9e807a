"""Vendor-reported failures (non-2xx responses and in-band stream errors)."""
from __future__ import annotations

from typing import Optional

from .classification import classify_status, heuristic_code
from .error_code import ErrorCode
from .provider_error import ProviderError

_RETRYABLE_STATUSES = frozenset({408, 429, 500, 502, 503, 504})


def format_vendor_message(vendor_code: Optional[str], message: Optional[str], status: Optional[int]) -> str:
    """Render the ``"{code}: {message}"`` form shown to callers.

    Falls back to ``"HTTP {status}: request failed"`` when the envelope carried
    no message, and to the bare message when no code is known.
    """
    if not message:
        return f"HTTP {status}: request failed" if status else f"{vendor_code or 'VendorError'}: request failed"
    if vendor_code:
        return f"{vendor_code}: {message}"
    if status:
        return f"HTTP {status}: {message}"
    return message


class VendorResponseError(ProviderError):
    """A vendor rejected the request or aborted the stream.

    ``status`` is the HTTP status for error responses and ``None`` for in-band
    error events delivered inside an otherwise successful stream.
    """

    def __init__(
        self,
        *,
        provider: str,
        model: Optional[str] = None,
        status: Optional[int] = None,
        vendor_code: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        if status is not None:
            code = classify_status(status)
        else:
            code = heuristic_code(f"{vendor_code or ''} {message or ''}".lower()) or ErrorCode.SERVER_ERROR
        super().__init__(
            code=code,
            message=format_vendor_message(vendor_code, message, status),
            provider=provider,
            model=model,
            status=status,
            vendor_code=vendor_code,
            retryable=status in _RETRYABLE_STATUSES if status is not None else False,
        )


__all__ = ["VendorResponseError", "format_vendor_message"]

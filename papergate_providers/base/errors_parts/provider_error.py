"""
Structured provider error exception type.

Every failure that leaves an adapter is a `ProviderError` (or a subclass)
carrying a normalized `ErrorCode` plus whatever HTTP/vendor context was
available when it was raised.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging and display.
        provider: Provider id where the error originated (e.g., ``"openai"``).
        model: Optional model name associated with the failure.
        status: HTTP status code when the failure came from a vendor response.
        vendor_code: Vendor error code/type parsed from the error envelope.
        retryable: Hint for the external scheduler (never acted on here).
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    status: Optional[int] = None
    vendor_code: Optional[str] = None
    retryable: bool = False
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


__all__ = ["ProviderError"]

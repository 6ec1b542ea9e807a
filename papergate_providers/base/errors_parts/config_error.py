"""Configuration error types raised before any network access."""
from __future__ import annotations

from typing import Iterable, Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


class ProviderConfigError(ProviderError):
    """Missing or invalid configuration (base URL, API key, provider id).

    Always fatal. Adapters raise it while validating ``ProviderConfig`` so no
    request is ever built from an incomplete configuration.
    """

    def __init__(self, message: str, provider: str = "gateway", model: Optional[str] = None) -> None:
        super().__init__(code=ErrorCode.CONFIG, message=message, provider=provider, model=model)


class UnknownProviderError(ProviderConfigError):
    """Raised when a provider id does not resolve to a registered adapter."""

    def __init__(self, provider_id: str, available: Iterable[str] = ()) -> None:
        self.available = sorted(available)
        listing = ", ".join(self.available) or "none"
        super().__init__(
            f"Unknown provider: {provider_id!r}. Available: {listing}",
            provider=provider_id or "gateway",
        )


__all__ = ["ProviderConfigError", "UnknownProviderError"]

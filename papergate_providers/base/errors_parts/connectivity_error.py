"""
Connectivity-test error carrying the full diagnostic bundle.

Only ``test_connection`` constructs these. The bundle is enough to replay the
failing request by hand: exact URL, serialized body, response headers and
body as received.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .classification import classify_status
from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass(frozen=True)
class ConnectivityDiagnostics:
    """Immutable snapshot of a failed connectivity test."""

    error_name: str
    message: str
    request_url: str
    request_body: str
    status: Optional[int] = None
    response_headers: Mapping[str, str] = field(default_factory=dict)
    response_body: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "response_headers", MappingProxyType(dict(self.response_headers)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_name": self.error_name,
            "message": self.message,
            "status": self.status,
            "request_url": self.request_url,
            "request_body": self.request_body,
            "response_headers": dict(self.response_headers),
            "response_body": self.response_body,
        }


def _code_for(diag: ConnectivityDiagnostics) -> ErrorCode:
    if diag.status is not None:
        return classify_status(diag.status)
    if diag.error_name == "Timeout":
        return ErrorCode.TIMEOUT
    return ErrorCode.NETWORK


class ConnectivityTestError(ProviderError):
    """Always-fatal failure of ``test_connection`` with diagnostics attached."""

    def __init__(self, diagnostics: ConnectivityDiagnostics, provider: str, model: Optional[str] = None) -> None:
        super().__init__(
            code=_code_for(diagnostics),
            message=f"{diagnostics.error_name}: {diagnostics.message}",
            provider=provider,
            model=model,
            status=diagnostics.status,
            vendor_code=diagnostics.error_name,
        )
        self.diagnostics = diagnostics

    @property
    def error_name(self) -> str:
        return self.diagnostics.error_name

    @property
    def request_url(self) -> str:
        return self.diagnostics.request_url

    @property
    def request_body(self) -> str:
        return self.diagnostics.request_body

    @property
    def response_headers(self) -> Mapping[str, str]:
        return self.diagnostics.response_headers

    @property
    def response_body(self) -> str:
        return self.diagnostics.response_body


__all__ = ["ConnectivityDiagnostics", "ConnectivityTestError"]

"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `papergate_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .classification import classify_exception, classify_status
from .config_error import ProviderConfigError, UnknownProviderError
from .vendor_error import VendorResponseError, format_vendor_message
from .connectivity_error import ConnectivityDiagnostics, ConnectivityTestError
from .envelope import parse_error_envelope, error_from_record

__all__ = [
    "ErrorCode",
    "ProviderError",
    "classify_exception",
    "classify_status",
    "ProviderConfigError",
    "UnknownProviderError",
    "VendorResponseError",
    "format_vendor_message",
    "ConnectivityDiagnostics",
    "ConnectivityTestError",
    "parse_error_envelope",
    "error_from_record",
]

"""Unified gateway error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``papergate_providers.base.errors_parts`` to keep a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import classify_exception, classify_status
from .errors_parts.config_error import ProviderConfigError, UnknownProviderError
from .errors_parts.vendor_error import VendorResponseError, format_vendor_message
from .errors_parts.connectivity_error import ConnectivityDiagnostics, ConnectivityTestError
from .errors_parts.envelope import DEFAULT_CODE_FIELDS, parse_error_envelope, error_from_record

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
    "DEFAULT_CODE_FIELDS",
]

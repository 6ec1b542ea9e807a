"""
Gateway base package.

Provider-agnostic building blocks shared by every vendor adapter:

- Interfaces: the provider contract and the multi-file capability
- Models: per-call configuration, conversation and multi-file records
- Streaming: the incremental parser, stream session and result policy
- Registry/Factory: explicit adapter enumeration and id lookup
"""

from .errors import (
    ConnectivityTestError,
    ErrorCode,
    ProviderConfigError,
    ProviderError,
    UnknownProviderError,
    VendorResponseError,
)
from .factory import ProviderFactory
from .interfaces import HasDefaultModel, LLMProvider, SupportsMultiFile
from .models import ConversationMessage, MultiFileInput, ProviderConfig, Role
from .registry import ProviderRegistry, get_registry, register_default_providers
from .streaming import IncrementalStreamParser, PartialResultPolicy, StreamDialect, StreamSession
from .timeouts import TimeoutConfig, get_timeout_config, resolve_request_timeout_ms

__all__ = [
    "ConnectivityTestError",
    "ErrorCode",
    "ProviderConfigError",
    "ProviderError",
    "UnknownProviderError",
    "VendorResponseError",
    "ProviderFactory",
    "HasDefaultModel",
    "LLMProvider",
    "SupportsMultiFile",
    "ConversationMessage",
    "MultiFileInput",
    "ProviderConfig",
    "Role",
    "ProviderRegistry",
    "get_registry",
    "register_default_providers",
    "IncrementalStreamParser",
    "PartialResultPolicy",
    "StreamDialect",
    "StreamSession",
    "TimeoutConfig",
    "get_timeout_config",
    "resolve_request_timeout_ms",
]

"""papergate_providers package

Unified LLM gateway: one streaming contract over several vendor APIs.

Purpose:
    Provide a minimal, stable API for external consumption (packaging is
    configured via the repository root ``pyproject.toml``). Callers either use
    the facade (``GatewayClient`` / module functions) or resolve adapters from
    the registry directly.

Public API (re-exported):
    - Version: ``__version__``
    - Facade: :class:`GatewayClient`, :func:`summarize`, :func:`chat`,
      :func:`summarize_multi_file`, :func:`test_connection`,
      :func:`list_providers`
    - Registry and factory: :func:`get_registry`,
      :func:`register_default_providers`, :func:`create`
    - Data types: :class:`ProviderConfig`, :class:`ConversationMessage`,
      :class:`MultiFileInput`, :class:`PartialResultPolicy`
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode`,
      :class:`ProviderConfigError`, :class:`UnknownProviderError`,
      :class:`VendorResponseError`, :class:`ConnectivityTestError`
"""

from .base.errors import (
    ConnectivityTestError,
    ErrorCode,
    ProviderConfigError,
    ProviderError,
    UnknownProviderError,
    VendorResponseError,
)
from .base.factory import ProviderFactory, create_provider as create
from .base.interfaces import LLMProvider, SupportsMultiFile
from .base.models import ConversationMessage, MultiFileInput, ProviderConfig
from .base.registry import ProviderRegistry, get_registry, register_default_providers
from .base.streaming import PartialResultPolicy
from .client import (
    GatewayClient,
    chat,
    get_client,
    list_providers,
    summarize,
    summarize_multi_file,
    test_connection,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "GatewayClient",
    "get_client",
    "summarize",
    "chat",
    "summarize_multi_file",
    "test_connection",
    "list_providers",
    "ProviderFactory",
    "create",
    "ProviderRegistry",
    "get_registry",
    "register_default_providers",
    "LLMProvider",
    "SupportsMultiFile",
    "ProviderConfig",
    "ConversationMessage",
    "MultiFileInput",
    "PartialResultPolicy",
    "ProviderError",
    "ErrorCode",
    "ProviderConfigError",
    "UnknownProviderError",
    "VendorResponseError",
    "ConnectivityTestError",
]

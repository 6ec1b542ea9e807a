"""Process-wide provider registry.

Maps a lowercase provider id to one adapter instance. The registry is filled
once at startup by :func:`register_default_providers`, which walks the
factory's explicit adapter table; nothing registers itself on import.

Concurrency
-----------
Reads (``get``/``list``) are lock-free against an immutable snapshot.
``register`` builds a new mapping and swaps it in under a lock, so a
re-registration is a full replace that concurrent readers observe either
entirely or not at all.
"""

from __future__ import annotations

import threading
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from .errors import UnknownProviderError
from .factory import ProviderFactory
from .http.transport import HttpTransport
from .interfaces import LLMProvider
from .logging import get_logger, log_event

# Alternate ids accepted from older configuration files
ALIASES: Dict[str, str] = {
    "google": "gemini",
    "claude": "anthropic",
    "volcanoark": "ark",
    "openai_compat": "openai-compat",
}


def normalize_provider_id(provider_id: Optional[str]) -> str:
    """Lowercase, trim and resolve aliases."""
    pid = (provider_id or "").strip().lower()
    return ALIASES.get(pid, pid)


class ProviderRegistry:
    """Central registry of adapter instances keyed by provider id."""

    def __init__(self) -> None:
        self._providers: Mapping[str, LLMProvider] = MappingProxyType({})
        self._write_lock = threading.Lock()
        self.logger = get_logger("registry")

    def register(self, provider: LLMProvider) -> None:
        """Insert ``provider`` under its self-reported id, replacing any prior one.

        Raises:
            ValueError: If the provider reports an empty id.
        """
        pid = normalize_provider_id(provider.provider_id)
        if not pid:
            raise ValueError("provider_id must be a non-empty string")
        with self._write_lock:
            updated = dict(self._providers)
            replaced = pid in updated
            updated[pid] = provider
            self._providers = MappingProxyType(updated)
        log_event(self.logger, "registry.register", provider=pid, replaced=replaced)

    def get(self, provider_id: str) -> LLMProvider:
        """Return the adapter for ``provider_id``.

        Raises:
            UnknownProviderError: If no adapter is registered under the id.
        """
        snapshot = self._providers
        adapter = snapshot.get(normalize_provider_id(provider_id))
        if adapter is None:
            raise UnknownProviderError(provider_id, snapshot.keys())
        return adapter

    def list(self) -> List[str]:
        """All registered ids, sorted, for configuration UIs."""
        return sorted(self._providers.keys())

    def __contains__(self, provider_id: object) -> bool:
        return isinstance(provider_id, str) and normalize_provider_id(provider_id) in self._providers

    def __len__(self) -> int:
        return len(self._providers)

    def clear(self) -> None:
        with self._write_lock:
            self._providers = MappingProxyType({})


_registry = ProviderRegistry()
_defaults_lock = threading.Lock()
_defaults_registered = False


def get_registry() -> ProviderRegistry:
    """Return the process-wide registry (empty until initialized)."""
    return _registry


def register_default_providers(
    registry: Optional[ProviderRegistry] = None,
    transport: Optional[HttpTransport] = None,
) -> ProviderRegistry:
    """Register every known adapter, in factory order.

    Parameters:
        registry: Target registry; the process-wide one when omitted.
        transport: Optional transport shared by the created adapters
            (tests pass a fake; production uses the pooled httpx transport).

    Returns:
        The populated registry.
    """
    target = registry if registry is not None else _registry
    kwargs = {"transport": transport} if transport is not None else {}
    for name in ProviderFactory.supported():
        target.register(ProviderFactory.create(name, **kwargs))
    return target


def ensure_default_providers() -> ProviderRegistry:
    """Initialize the process-wide registry once; later calls are no-ops."""
    global _defaults_registered  # noqa: PLW0603 - one-shot init flag
    if _defaults_registered:
        return _registry
    with _defaults_lock:
        if not _defaults_registered:
            register_default_providers(_registry)
            _defaults_registered = True
    return _registry


__all__ = [
    "ALIASES",
    "ProviderRegistry",
    "normalize_provider_id",
    "get_registry",
    "register_default_providers",
    "ensure_default_providers",
]

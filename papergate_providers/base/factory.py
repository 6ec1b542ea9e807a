"""Provider Factory utilities.

Purpose
-------
Create adapter instances by canonical id from an explicit, ordered table.
Adapters are imported lazily with ``importlib`` so the base layer never
imports vendor packages at module import time.

Failure semantics
-----------------
The factory performs no retries or fallbacks; it returns an instance or
raises :class:`UnknownProviderError` (a configuration error).
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple, Type

from .errors import UnknownProviderError


class ProviderFactory:
    """Create provider adapters based on a canonical id (e.g., ``"openai"``).

    ``_PROVIDERS`` is the single enumeration of known adapters; its order is
    the registration order used by :func:`register_default_providers`.
    """

    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "openai": {"module": "papergate_providers.openai.client", "class": "OpenAIProvider"},
        "openai-compat": {
            "module": "papergate_providers.openai_compat.client",
            "class": "OpenAICompatProvider",
        },
        "openrouter": {"module": "papergate_providers.openrouter.client", "class": "OpenRouterProvider"},
        "gemini": {"module": "papergate_providers.gemini.client", "class": "GeminiProvider"},
        "anthropic": {"module": "papergate_providers.anthropic.client", "class": "AnthropicProvider"},
        "ark": {"module": "papergate_providers.ark.client", "class": "ArkProvider"},
    }

    @classmethod
    def create(cls, provider: str, **kwargs: Any) -> Any:
        """Create a provider adapter instance.

        Parameters
        ----------
        provider:
            Canonical provider id.
        **kwargs:
            Adapter constructor kwargs (``transport``, ``logger``).

        Raises
        ------
        UnknownProviderError
            If the id is unknown, the module or class is missing, or the
            constructor rejects the arguments.
        """
        name = (provider or "").lower().strip()
        spec = cls._PROVIDERS.get(name)
        if not spec:
            raise UnknownProviderError(provider, cls.supported())

        module_path, class_name = spec["module"], spec["class"]
        try:
            mod = import_module(module_path)
            klass: Type = getattr(mod, class_name)
        except (ImportError, AttributeError) as exc:
            raise UnknownProviderError(provider, cls.supported()) from exc

        try:
            return klass(**kwargs)
        except TypeError as exc:
            raise UnknownProviderError(provider, cls.supported()) from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Canonical provider ids in deterministic order."""
        return tuple(cls._PROVIDERS.keys())


def create_provider(provider: str, **kwargs: Any) -> Any:
    """Module-level alias for :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(provider, **kwargs)


__all__ = ["ProviderFactory", "create_provider", "UnknownProviderError"]

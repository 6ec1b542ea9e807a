"""Gateway facade.

Purpose:
    One entry point for callers that only know a provider id: resolve the id
    through the registry, build the per-call :class:`ProviderConfig` from the
    configuration layer, and dispatch to the adapter.

Defaults:
    Provider id falls back to :data:`DEFAULT_PROVIDER`. When the merged
    configuration leaves ``temperature`` unset it is filled with
    :data:`DEFAULT_TEMPERATURE`; other sampling parameters stay opt-in so
    vendors that reject them are never sent them implicitly. Connectivity
    tests always run non-streaming.

Failure semantics:
    Unknown ids raise :class:`UnknownProviderError`; multi-file requests to
    adapters without the capability raise ``ProviderError(UNSUPPORTED)``.
    Both happen before any network access.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, List, Optional, Sequence

from .base.errors import ErrorCode, ProviderError
from .base.interfaces import LLMProvider, ProgressCallback, SupportsMultiFile
from .base.logging import get_logger, log_event
from .base.models import ConversationMessage, MultiFileInput, ProviderConfig
from .base.prompts import DEFAULT_SUMMARY_PROMPT
from .base.registry import ProviderRegistry, ensure_default_providers, normalize_provider_id
from .base.streaming import PartialResultPolicy
from .config import get_provider_config
from .config.defaults import DEFAULT_PROVIDER, DEFAULT_TEMPERATURE

ConfigLoader = Callable[[str, Optional[Dict[str, Any]]], ProviderConfig]


class GatewayClient:
    """Resolve, configure and dispatch gateway calls by provider id.

    Parameters:
        registry: Registry to resolve ids against; the process-wide default
            registry (initialized on first use) when omitted.
        config_loader: ``(provider_id, overrides) -> ProviderConfig``;
            :func:`get_provider_config` by default.
    """

    def __init__(
        self,
        registry: Optional[ProviderRegistry] = None,
        *,
        config_loader: ConfigLoader = get_provider_config,
    ) -> None:
        self._registry = registry
        self._config_loader = config_loader
        self.logger = get_logger("gateway")

    @property
    def registry(self) -> ProviderRegistry:
        if self._registry is None:
            self._registry = ensure_default_providers()
        return self._registry

    def list_providers(self) -> List[str]:
        return self.registry.list()

    def provider(self, provider_id: Optional[str] = None) -> LLMProvider:
        return self.registry.get(normalize_provider_id(provider_id or DEFAULT_PROVIDER))

    def config(self, provider_id: Optional[str] = None, **overrides: Any) -> ProviderConfig:
        """Merged configuration for ``provider_id`` with call overrides applied."""
        pid = normalize_provider_id(provider_id or DEFAULT_PROVIDER)
        cfg = self._config_loader(pid, {k: v for k, v in overrides.items() if v is not None} or None)
        if cfg.temperature is None:
            cfg = cfg.with_overrides(temperature=DEFAULT_TEMPERATURE)
        return cfg

    def _prepare(self, provider: Optional[str], config: Optional[ProviderConfig], operation: str):
        adapter = self.provider(provider)
        cfg = config if config is not None else self.config(adapter.provider_id)
        log_event(
            self.logger,
            "gateway.dispatch",
            provider=adapter.provider_id,
            model=cfg.model or None,
            operation=operation,
            stream=cfg.stream,
        )
        return adapter, cfg

    @staticmethod
    def _policy_kwargs(policy: Optional[PartialResultPolicy]) -> Dict[str, Any]:
        return {"partial_result_policy": policy} if policy is not None else {}

    def summarize(
        self,
        content: str,
        *,
        is_encoded: bool = False,
        prompt: Optional[str] = None,
        provider: Optional[str] = None,
        config: Optional[ProviderConfig] = None,
        on_progress: Optional[ProgressCallback] = None,
        partial_result_policy: Optional[PartialResultPolicy] = None,
    ) -> str:
        adapter, cfg = self._prepare(provider, config, "summarize")
        return adapter.summarize(
            content,
            is_encoded,
            prompt or DEFAULT_SUMMARY_PROMPT,
            cfg,
            on_progress,
            **self._policy_kwargs(partial_result_policy),
        )

    def chat(
        self,
        document_content: str,
        conversation: Sequence[ConversationMessage],
        *,
        is_encoded: bool = False,
        provider: Optional[str] = None,
        config: Optional[ProviderConfig] = None,
        on_progress: Optional[ProgressCallback] = None,
        partial_result_policy: Optional[PartialResultPolicy] = None,
    ) -> str:
        adapter, cfg = self._prepare(provider, config, "chat")
        return adapter.chat(
            document_content,
            is_encoded,
            list(conversation),
            cfg,
            on_progress,
            **self._policy_kwargs(partial_result_policy),
        )

    def summarize_multi_file(
        self,
        files: Sequence[MultiFileInput],
        prompt: Optional[str] = None,
        *,
        provider: Optional[str] = None,
        config: Optional[ProviderConfig] = None,
        on_progress: Optional[ProgressCallback] = None,
        partial_result_policy: Optional[PartialResultPolicy] = None,
    ) -> str:
        """Dispatch a multi-file summary.

        Raises:
            ProviderError: ``UNSUPPORTED`` when the adapter cannot embed
                several documents in one request.
        """
        adapter = self.provider(provider)
        if not isinstance(adapter, SupportsMultiFile):
            raise ProviderError(
                code=ErrorCode.UNSUPPORTED,
                message=f"provider {adapter.provider_id!r} does not support multi-file requests",
                provider=adapter.provider_id,
            )
        adapter, cfg = self._prepare(adapter.provider_id, config, "summarize_multi_file")
        return adapter.summarize_multi_file(
            list(files),
            prompt or DEFAULT_SUMMARY_PROMPT,
            cfg,
            on_progress,
            **self._policy_kwargs(partial_result_policy),
        )

    def test_connection(self, provider: Optional[str] = None, config: Optional[ProviderConfig] = None) -> str:
        adapter, cfg = self._prepare(provider, config, "test_connection")
        if cfg.stream:
            cfg = cfg.with_overrides(stream=False)
        return adapter.test_connection(cfg)


_default_client: Optional[GatewayClient] = None
_default_lock = threading.Lock()


def get_client() -> GatewayClient:
    """Process-wide facade bound to the default registry."""
    global _default_client  # noqa: PLW0603 - lazy singleton
    if _default_client is None:
        with _default_lock:
            if _default_client is None:
                _default_client = GatewayClient()
    return _default_client


def list_providers() -> List[str]:
    return get_client().list_providers()


def summarize(content: str, **kwargs: Any) -> str:
    return get_client().summarize(content, **kwargs)


def chat(document_content: str, conversation: Sequence[ConversationMessage], **kwargs: Any) -> str:
    return get_client().chat(document_content, conversation, **kwargs)


def summarize_multi_file(files: Sequence[MultiFileInput], prompt: Optional[str] = None, **kwargs: Any) -> str:
    return get_client().summarize_multi_file(files, prompt, **kwargs)


def test_connection(provider: Optional[str] = None, config: Optional[ProviderConfig] = None) -> str:
    return get_client().test_connection(provider, config)


# not a pytest test function
test_connection.__test__ = False  # type: ignore[attr-defined]


__all__ = [
    "GatewayClient",
    "get_client",
    "list_providers",
    "summarize",
    "chat",
    "summarize_multi_file",
    "test_connection",
]

"""AnthropicProvider adapter.

Talks to the Messages API (``POST {base}/v1/messages``) over httpx.

Key behaviors / architecture notes:
* Auth uses ``x-api-key`` plus a pinned ``anthropic-version`` header.
* ``max_tokens`` is always sent (validated by :class:`MessagesPayload`).
* Embedded PDFs are ``document`` blocks with a base64 source; raw text is
  wrapped into the first user turn.
* Streaming decodes named SSE events through :data:`ANTHROPIC_DIALECT`;
  in-band ``error`` events abort the stream like an HTTP error.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence

from ..base.interfaces import ProgressCallback
from ..base.models import ConversationMessage, ProviderConfig
from ..base.provider_base import BaseGatewayProvider
from ..base.streaming import PartialResultPolicy
from ..config.defaults import ANTHROPIC_API_VERSION, ANTHROPIC_DEFAULT_MODEL
from .payloads import build_chat, build_connectivity, build_summary
from .stream_helpers import ANTHROPIC_CODE_FIELDS, ANTHROPIC_DIALECT, extract_message_text


class AnthropicProvider(BaseGatewayProvider):
    """Adapter for Anthropic Claude models."""

    provider_id = "anthropic"
    DEFAULT_MODEL = ANTHROPIC_DEFAULT_MODEL
    dialect = ANTHROPIC_DIALECT
    error_code_fields = ANTHROPIC_CODE_FIELDS

    def _headers(self, config: ProviderConfig) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": config.api_key,
            "anthropic-version": ANTHROPIC_API_VERSION,
        }

    @staticmethod
    def _endpoint(config: ProviderConfig) -> str:
        return f"{config.base_url.rstrip('/')}/v1/messages"

    def summarize(
        self,
        content: str,
        is_encoded: bool,
        prompt: str,
        config: ProviderConfig,
        on_progress: Optional[ProgressCallback] = None,
        *,
        partial_result_policy: Optional[PartialResultPolicy] = None,
    ) -> str:
        model = self._require_config(config)
        return self._execute(
            self._endpoint(config),
            build_summary(model, content, is_encoded, prompt, config),
            config,
            model,
            on_progress,
            operation="summarize",
            extract_text=extract_message_text,
            policy=partial_result_policy,
        )

    def chat(
        self,
        document_content: str,
        is_encoded: bool,
        conversation: Sequence[ConversationMessage],
        config: ProviderConfig,
        on_progress: Optional[ProgressCallback] = None,
        *,
        partial_result_policy: Optional[PartialResultPolicy] = None,
    ) -> str:
        model = self._require_config(config)
        return self._execute(
            self._endpoint(config),
            build_chat(model, document_content, is_encoded, conversation, config),
            config,
            model,
            on_progress,
            operation="chat",
            extract_text=extract_message_text,
            policy=partial_result_policy,
        )

    def test_connection(self, config: ProviderConfig) -> str:
        model = self._require_config(config)
        return self._connectivity_test(
            self._endpoint(config),
            build_connectivity(model),
            config,
            model,
            extract_reply=extract_message_text,
        )


__all__ = ["AnthropicProvider"]

"""OpenAICompatProvider adapter.

Targets third-party services that implement the Chat Completions wire format
(SiliconFlow-style relays, self-hosted gateways). The configured base URL is
the full endpoint and is used verbatim.

Key behaviors:
* Bearer auth; ``stream`` toggles SSE framing with the ``[DONE]`` sentinel.
* Encoded documents are attached to the first user turn through
  :meth:`_document_part`; subclasses (OpenRouter) change only that shape and
  their headers.
* Connectivity tests send the system prompt and the configured sampling
  parameters so the relay sees a representative request.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..base.interfaces import ProgressCallback
from ..base.models import ConversationMessage, ProviderConfig
from ..base.openai_style_parts import CHAT_COMPLETIONS_DIALECT, ChatContentPart, extract_chat_message
from ..base.provider_base import BaseGatewayProvider
from ..base.streaming import PartialResultPolicy
from ..config.defaults import OPENAI_COMPAT_DEFAULT_MODEL
from .payloads import build_chat, build_connectivity, build_summary, image_url_document


class OpenAICompatProvider(BaseGatewayProvider):
    """Adapter for OpenAI-compatible Chat Completions relays."""

    provider_id = "openai-compat"
    DEFAULT_MODEL = OPENAI_COMPAT_DEFAULT_MODEL
    dialect = CHAT_COMPLETIONS_DIALECT

    def _endpoint(self, config: ProviderConfig) -> str:
        return config.base_url

    def _document_part(self, encoded: str) -> ChatContentPart:
        return image_url_document(encoded)

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
            build_summary(model, content, is_encoded, prompt, config, self._document_part),
            config,
            model,
            on_progress,
            operation="summarize",
            extract_text=extract_chat_message,
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
            build_chat(model, document_content, is_encoded, conversation, config, self._document_part),
            config,
            model,
            on_progress,
            operation="chat",
            extract_text=extract_chat_message,
            policy=partial_result_policy,
        )

    def test_connection(self, config: ProviderConfig) -> str:
        model = self._require_config(config)
        return self._connectivity_test(
            self._endpoint(config),
            build_connectivity(model, config),
            config,
            model,
            extract_reply=extract_chat_message,
        )


__all__ = ["OpenAICompatProvider"]

"""OpenAIProvider adapter.

Speaks two OpenAI wire formats through the shared gateway plumbing:

* Responses API (``/v1/responses``) whenever a base64 PDF is embedded, for
  multi-file requests and for connectivity tests.
* Chat Completions (``/v1/chat/completions``) for raw-text documents.

Endpoint derivation:
    The configured base URL may be the bare host, any ``/v1/...`` endpoint
    or the exact target; :func:`derive_v1_endpoint` normalizes it for each
    dialect so one configuration value serves both.

Failure semantics:
    Streaming calls follow the operation's :class:`PartialResultPolicy`
    (partial text under ``FALLBACK`` once any delta arrived). Connectivity
    tests never fall back and raise :class:`ConnectivityTestError`.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..base.errors import ErrorCode, ProviderError
from ..base.interfaces import ProgressCallback
from ..base.models import ConversationMessage, MultiFileInput, ProviderConfig
from ..base.openai_style_parts import (
    CHAT_COMPLETIONS_DIALECT,
    RESPONSES_DIALECT,
    derive_v1_endpoint,
    extract_chat_message,
    extract_responses_output,
)
from ..base.provider_base import BaseGatewayProvider
from ..base.streaming import PartialResultPolicy
from ..config.defaults import OPENAI_DEFAULT_MODEL, OPENAI_FILE_MODEL
from .payloads import (
    build_connectivity,
    build_document_chat,
    build_document_summary,
    build_multi_file,
    build_text_chat,
    build_text_summary,
)

RESPONSES_PATH = "responses"
CHAT_COMPLETIONS_PATH = "chat/completions"


class OpenAIProvider(BaseGatewayProvider):
    """Adapter for the OpenAI API (Responses + Chat Completions)."""

    provider_id = "openai"
    DEFAULT_MODEL = OPENAI_DEFAULT_MODEL
    dialect = RESPONSES_DIALECT

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
        """Summarize one document.

        Encoded documents go to the Responses endpoint as an ``input_file``;
        raw text is wrapped into a Chat Completions user message.
        """
        model = self._require_config(config)
        if is_encoded:
            return self._execute(
                derive_v1_endpoint(config.base_url, RESPONSES_PATH),
                build_document_summary(model, content, prompt, config),
                config,
                model,
                on_progress,
                operation="summarize",
                extract_text=extract_responses_output,
                policy=partial_result_policy,
                dialect=RESPONSES_DIALECT,
            )
        return self._execute(
            derive_v1_endpoint(config.base_url, CHAT_COMPLETIONS_PATH),
            build_text_summary(model, content, prompt, config),
            config,
            model,
            on_progress,
            operation="summarize",
            extract_text=extract_chat_message,
            policy=partial_result_policy,
            dialect=CHAT_COMPLETIONS_DIALECT,
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
        if is_encoded:
            return self._execute(
                derive_v1_endpoint(config.base_url, RESPONSES_PATH),
                build_document_chat(model, document_content, conversation, config),
                config,
                model,
                on_progress,
                operation="chat",
                extract_text=extract_responses_output,
                policy=partial_result_policy,
                dialect=RESPONSES_DIALECT,
            )
        return self._execute(
            derive_v1_endpoint(config.base_url, CHAT_COMPLETIONS_PATH),
            build_text_chat(model, document_content, conversation, config),
            config,
            model,
            on_progress,
            operation="chat",
            extract_text=extract_chat_message,
            policy=partial_result_policy,
            dialect=CHAT_COMPLETIONS_DIALECT,
        )

    def summarize_multi_file(
        self,
        files: Sequence[MultiFileInput],
        prompt: str,
        config: ProviderConfig,
        on_progress: Optional[ProgressCallback] = None,
        *,
        partial_result_policy: Optional[PartialResultPolicy] = None,
    ) -> str:
        """Summarize several PDFs in one Responses request.

        Raises:
            ProviderError: ``VALIDATION`` when ``files`` is empty or no file
                carries an encoded payload.
        """
        self._require_config(config)
        model = config.model or OPENAI_FILE_MODEL
        if not files:
            raise ProviderError(
                code=ErrorCode.VALIDATION, message="no files to summarize", provider=self.provider_id, model=model
            )
        if not any(f.has_payload for f in files):
            raise ProviderError(
                code=ErrorCode.VALIDATION,
                message="none of the files carries an encoded payload",
                provider=self.provider_id,
                model=model,
            )
        return self._execute(
            derive_v1_endpoint(config.base_url, RESPONSES_PATH),
            build_multi_file(model, files, prompt, config),
            config,
            model,
            on_progress,
            operation="summarize_multi_file",
            extract_text=extract_responses_output,
            policy=partial_result_policy,
            dialect=RESPONSES_DIALECT,
        )

    def test_connection(self, config: ProviderConfig) -> str:
        model = self._require_config(config)
        return self._connectivity_test(
            derive_v1_endpoint(config.base_url, RESPONSES_PATH),
            build_connectivity(model),
            config,
            model,
            extract_reply=extract_responses_output,
        )


__all__ = ["OpenAIProvider"]

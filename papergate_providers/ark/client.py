"""ArkProvider adapter (Volcano Engine Ark).

Endpoint:
    ``{base}/responses``; the suffix is appended only when the configured URL
    does not already end with it.

Key behaviors:
* Bearer auth, Responses-style ``input`` items.
* ``max_output_tokens`` always sent (4096, or 8192 for multi-file requests,
  unless configured).
* Full-response extraction also reads reasoning summaries so a
  connectivity probe with a tiny token budget still reports a reply.
"""

from __future__ import annotations

from typing import Optional, Sequence

from ..base.errors import ErrorCode, ProviderError
from ..base.interfaces import ProgressCallback
from ..base.models import ConversationMessage, MultiFileInput, ProviderConfig
from ..base.provider_base import BaseGatewayProvider
from ..base.streaming import PartialResultPolicy
from ..config.defaults import ARK_DEFAULT_MODEL
from .payloads import build_chat, build_connectivity, build_multi_file, build_summary
from .stream_helpers import ARK_DIALECT, extract_ark_output

RESPONSES_SUFFIX = "/responses"


def responses_endpoint(base_url: str) -> str:
    url = base_url.rstrip("/")
    return url if url.endswith(RESPONSES_SUFFIX) else url + RESPONSES_SUFFIX


class ArkProvider(BaseGatewayProvider):
    """Adapter for Volcano Engine Ark (Doubao) models."""

    provider_id = "ark"
    DEFAULT_MODEL = ARK_DEFAULT_MODEL
    dialect = ARK_DIALECT

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
            responses_endpoint(config.base_url),
            build_summary(model, content, is_encoded, prompt, config),
            config,
            model,
            on_progress,
            operation="summarize",
            extract_text=extract_ark_output,
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
            responses_endpoint(config.base_url),
            build_chat(model, document_content, is_encoded, conversation, config),
            config,
            model,
            on_progress,
            operation="chat",
            extract_text=extract_ark_output,
            policy=partial_result_policy,
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
        """Summarize several PDFs in one request.

        Raises:
            ProviderError: ``VALIDATION`` when no file carries a payload.
        """
        model = self._require_config(config)
        if not any(f.has_payload for f in files):
            raise ProviderError(
                code=ErrorCode.VALIDATION,
                message="none of the files carries an encoded payload",
                provider=self.provider_id,
                model=model,
            )
        return self._execute(
            responses_endpoint(config.base_url),
            build_multi_file(model, files, prompt, config),
            config,
            model,
            on_progress,
            operation="summarize_multi_file",
            extract_text=extract_ark_output,
            policy=partial_result_policy,
        )

    def test_connection(self, config: ProviderConfig) -> str:
        model = self._require_config(config)
        return self._connectivity_test(
            responses_endpoint(config.base_url),
            build_connectivity(model),
            config,
            model,
            extract_reply=extract_ark_output,
        )


__all__ = ["ArkProvider", "responses_endpoint"]

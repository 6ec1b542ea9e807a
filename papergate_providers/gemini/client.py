"""GeminiProvider adapter.

Calls the Generative Language REST API directly over httpx:

* streaming: ``{base}/v1beta/models/{model}:streamGenerateContent?alt=sse``
* blocking and connectivity: ``{base}/v1beta/models/{model}:generateContent``

The key travels in the ``x-goog-api-key`` header, never in the query string,
so URLs are safe to log and to echo in connectivity diagnostics.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence
from urllib.parse import quote

from ..base.interfaces import ProgressCallback
from ..base.models import ConversationMessage, ProviderConfig
from ..base.provider_base import BaseGatewayProvider
from ..base.streaming import PartialResultPolicy
from ..config.defaults import GEMINI_DEFAULT_MODEL
from .payloads import build_chat, build_connectivity, build_summary
from .stream_helpers import GEMINI_DIALECT, extract_gemini_text


def model_endpoint(base_url: str, model: str, *, stream: bool) -> str:
    """Build the per-model method URL."""
    root = f"{base_url.rstrip('/')}/v1beta/models/{quote(model, safe='')}"
    if stream:
        return f"{root}:streamGenerateContent?alt=sse"
    return f"{root}:generateContent"


class GeminiProvider(BaseGatewayProvider):
    """Adapter for Google Gemini models."""

    provider_id = "gemini"
    DEFAULT_MODEL = GEMINI_DEFAULT_MODEL
    dialect = GEMINI_DIALECT
    # Gemini envelopes carry a numeric ``code`` and a symbolic ``status``
    error_code_fields = ("code", "status")

    def _headers(self, config: ProviderConfig) -> Dict[str, str]:
        return {"Content-Type": "application/json", "x-goog-api-key": config.api_key}

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
            model_endpoint(config.base_url, model, stream=config.stream),
            build_summary(content, is_encoded, prompt, config),
            config,
            model,
            on_progress,
            operation="summarize",
            extract_text=extract_gemini_text,
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
            model_endpoint(config.base_url, model, stream=config.stream),
            build_chat(document_content, is_encoded, conversation, config),
            config,
            model,
            on_progress,
            operation="chat",
            extract_text=extract_gemini_text,
            policy=partial_result_policy,
        )

    def test_connection(self, config: ProviderConfig) -> str:
        model = self._require_config(config)
        return self._connectivity_test(
            model_endpoint(config.base_url, model, stream=False),
            build_connectivity(),
            config,
            model,
            extract_reply=extract_gemini_text,
        )


__all__ = ["GeminiProvider", "model_endpoint"]

"""OpenRouter provider adapter (OpenAI-compatible relay).

Summary:
- Same Chat Completions dialect and endpoint handling as
  :class:`OpenAICompatProvider`.
- Adds the attribution headers OpenRouter uses for app rankings
  (``HTTP-Referer``, ``X-Title``), overridable through the ``http_referer``
  and ``x_title`` vendor options.
- Embedded PDFs travel as ``file`` parts, which OpenRouter routes to a
  document-capable parser; several of them may share one request.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence

from ..base.errors import ErrorCode, ProviderError
from ..base.interfaces import ProgressCallback
from ..base.models import MultiFileInput, ProviderConfig
from ..base.openai_style_parts import ChatContentPart, extract_chat_message
from ..base.prompts import pdf_data_url
from ..base.streaming import PartialResultPolicy
from ..config.defaults import OPENROUTER_DEFAULT_MODEL, OPENROUTER_DEFAULT_REFERER, OPENROUTER_DEFAULT_TITLE
from ..openai_compat.client import OpenAICompatProvider
from ..openai_compat.payloads import build_multi_file

DOCUMENT_FILENAME = "document.pdf"


def file_part(filename: str, encoded: str) -> ChatContentPart:
    return ChatContentPart.file_part(filename, pdf_data_url(encoded))


class OpenRouterProvider(OpenAICompatProvider):
    """Adapter for OpenRouter's Chat Completions endpoint."""

    provider_id = "openrouter"
    DEFAULT_MODEL = OPENROUTER_DEFAULT_MODEL

    def _headers(self, config: ProviderConfig) -> Dict[str, str]:
        headers = super()._headers(config)
        headers["HTTP-Referer"] = str(config.option("http_referer") or OPENROUTER_DEFAULT_REFERER)
        headers["X-Title"] = str(config.option("x_title") or OPENROUTER_DEFAULT_TITLE)
        return headers

    def _document_part(self, encoded: str) -> ChatContentPart:
        return file_part(DOCUMENT_FILENAME, encoded)

    def summarize_multi_file(
        self,
        files: Sequence[MultiFileInput],
        prompt: str,
        config: ProviderConfig,
        on_progress: Optional[ProgressCallback] = None,
        *,
        partial_result_policy: Optional[PartialResultPolicy] = None,
    ) -> str:
        """Send every file with a payload as a ``file`` part after the prompt.

        Raises:
            ProviderError: ``VALIDATION`` when no usable file remains.
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
            self._endpoint(config),
            build_multi_file(model, files, prompt, config, file_part),
            config,
            model,
            on_progress,
            operation="summarize_multi_file",
            extract_text=extract_chat_message,
            policy=partial_result_policy,
        )


__all__ = ["OpenRouterProvider"]

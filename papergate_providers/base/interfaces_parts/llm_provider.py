"""LLMProvider Protocol (single-class module).

Defines the contract every vendor adapter implements.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol, Sequence, runtime_checkable

from ..models import ConversationMessage, ProviderConfig

ProgressCallback = Callable[[str], None]


@runtime_checkable
class LLMProvider(Protocol):
    """Vendor-agnostic gateway contract.

    Every operation validates ``config`` first and raises
    ``ProviderConfigError`` before building any request when the base URL or
    API key is empty. Other failures surface as ``ProviderError`` subclasses;
    streaming operations may instead return partial text when output had
    already arrived (see ``PartialResultPolicy``).
    """

    @property
    def provider_id(self) -> str:
        """Canonical lowercase identifier, e.g. ``"openai"`` or ``"gemini"``."""
        ...

    def summarize(
        self,
        content: str,
        is_encoded: bool,
        prompt: str,
        config: ProviderConfig,
        on_progress: Optional[ProgressCallback] = None,
    ) -> str:
        """One-shot document analysis.

        ``is_encoded`` selects base64 document embedding over raw-text
        embedding in the vendor payload.
        """
        ...

    def chat(
        self,
        document_content: str,
        is_encoded: bool,
        conversation: Sequence[ConversationMessage],
        config: ProviderConfig,
        on_progress: Optional[ProgressCallback] = None,
    ) -> str:
        """Continue a conversation whose first entry carries the document prompt."""
        ...

    def test_connection(self, config: ProviderConfig) -> str:
        """Issue a minimal non-streaming request and return a readable report.

        Raises ``ConnectivityTestError`` with full diagnostics on failure.
        """
        ...

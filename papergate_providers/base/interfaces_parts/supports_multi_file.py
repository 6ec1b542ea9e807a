"""SupportsMultiFile Protocol (single-class module).

Capability marker for adapters whose vendor accepts several documents in one
request.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol, Sequence, runtime_checkable

from ..models import MultiFileInput, ProviderConfig


@runtime_checkable
class SupportsMultiFile(Protocol):
    """Adapters implementing ``summarize_multi_file``.

    Files without ``encoded_payload`` are skipped. When no usable file
    remains the adapter raises ``ProviderError`` with ``VALIDATION``.
    """

    def summarize_multi_file(
        self,
        files: Sequence[MultiFileInput],
        prompt: str,
        config: ProviderConfig,
        on_progress: Optional[Callable[[str], None]] = None,
    ) -> str:
        ...

"""
Provider-agnostic interfaces (Protocols) for the gateway.

Re-exports the single-class modules under
``papergate_providers.base.interfaces_parts``.
"""

from __future__ import annotations

from .interfaces_parts import (
    HasDefaultModel,
    LLMProvider,
    ProgressCallback,
    SupportsMultiFile,
)

__all__ = [
    "LLMProvider",
    "ProgressCallback",
    "SupportsMultiFile",
    "HasDefaultModel",
]

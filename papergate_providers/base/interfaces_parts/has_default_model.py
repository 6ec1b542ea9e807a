"""HasDefaultModel Protocol (single-class module)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class HasDefaultModel(Protocol):
    """Adapters that substitute a model when ``ProviderConfig.model`` is empty."""

    def default_model(self) -> str:  # pragma: no cover - trivial
        ...

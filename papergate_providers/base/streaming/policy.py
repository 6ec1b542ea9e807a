"""Partial-result policy applied when a stream ends abnormally.

One function decides the outcome for every adapter and operation, so the
recoverable/fatal split is auditable in one place:

1. Clean completion returns the accumulated text (possibly empty).
2. ``FALLBACK`` with at least one delta returns the partial text.
3. Otherwise the captured abort error (vendor HTTP status or in-band error
   event) is raised in preference to a generic transport error.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional

from ..errors import ProviderError


class PartialResultPolicy(str, Enum):
    """How an operation treats output received before a failure."""

    FALLBACK = "fallback"
    ALWAYS_FATAL = "always-fatal"


def settle_stream_result(
    *,
    policy: PartialResultPolicy,
    text: str,
    received_any_delta: bool,
    abort_error: Optional[ProviderError] = None,
    transport_error: Optional[ProviderError] = None,
) -> str:
    """Return the final text or raise the failure selected by ``policy``.

    Raises
    ------
    ProviderError
        ``abort_error`` when present, else ``transport_error``, whenever the
        stream failed and no partial result may be returned.
    """
    failure = abort_error or transport_error
    if failure is None:
        return text
    if policy is PartialResultPolicy.FALLBACK and received_any_delta:
        return text
    raise failure


__all__ = ["PartialResultPolicy", "settle_stream_result"]

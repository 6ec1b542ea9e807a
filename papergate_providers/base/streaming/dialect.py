"""Per-vendor specialization of the incremental stream parser."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

from ..constants import SSE_DATA_PREFIX, SSE_DONE_SENTINEL

DeltaExtractor = Callable[[Any], Optional[str]]
ErrorDetector = Callable[[Any], Optional[Tuple[Optional[str], Optional[str]]]]


@dataclass(frozen=True)
class StreamDialect:
    """Everything the shared parser needs to know about one wire dialect.

    Attributes:
        name: Dialect label used in logs (e.g. ``"openai.responses"``).
        extract_delta: Returns the new text carried by one decoded record, or
            ``None``/``""`` for records that carry none (including events that
            restate already-delivered text).
        data_prefix: Line prefix marking a data record.
        sentinel: Payload value marking explicit end of stream, if any.
        detect_error: Returns ``(vendor_code, message)`` when a decoded record
            is an in-band error event, else ``None``.
    """

    name: str
    extract_delta: DeltaExtractor
    data_prefix: str = SSE_DATA_PREFIX
    sentinel: Optional[str] = SSE_DONE_SENTINEL
    detect_error: Optional[ErrorDetector] = None


__all__ = ["StreamDialect", "DeltaExtractor", "ErrorDetector"]

"""Per-call stream counters reported in the ``stream.end`` log event."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass
class StreamMetrics:
    """Counters for a single streaming call.

    ``chars`` counts delivered characters, never content; document text and
    replies stay out of the logs.
    """

    chunks: int = 0
    deltas: int = 0
    chars: int = 0
    skipped_records: int = 0
    callback_errors: int = 0
    time_to_first_delta_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["StreamMetrics"]

"""Ark stream decoding.

Ark emits Responses-style events. Only ``response.output_text.delta``
carries new output text:

- ``response.output_text.done`` / ``response.completed`` restate text that
  was already streamed and must not be re-emitted;
- ``response.reasoning_summary_text.delta`` is the model's thinking, not
  part of the answer.

Some gateways in front of Ark answer with Chat Completions chunks instead;
untyped records fall back to ``choices[0].delta.content``.
"""

from __future__ import annotations

from typing import Any, Optional

from ..base.openai_style_parts import (
    detect_responses_error,
    extract_chat_delta,
    extract_responses_delta,
    extract_responses_output,
)
from ..base.streaming import StreamDialect


def extract_ark_delta(record: Any) -> Optional[str]:
    if not isinstance(record, dict):
        return None
    if record.get("type"):
        return extract_responses_delta(record)
    return extract_chat_delta(record)


def extract_ark_output(record: Any) -> Optional[str]:
    """Full-response text, including reasoning summaries for short replies."""
    return extract_responses_output(record, include_reasoning=True)


ARK_DIALECT = StreamDialect(
    name="ark.responses",
    extract_delta=extract_ark_delta,
    detect_error=detect_responses_error,
)

__all__ = ["ARK_DIALECT", "extract_ark_delta", "extract_ark_output"]

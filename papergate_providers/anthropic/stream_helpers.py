"""Anthropic streaming helpers.

The Messages stream is a sequence of named events (``message_start``,
``content_block_start``, ``content_block_delta``, ``message_stop`` ...). Only
``content_block_delta`` with a ``text_delta`` carries new text; there is no
``[DONE]`` sentinel. Overload and similar failures may arrive in-band as an
``error`` event after the HTTP 200.
"""

from __future__ import annotations

from typing import Any, Optional

from ..base.errors import error_from_record
from ..base.streaming import StreamDialect
from ..base.utils.json_safe import get_path

ANTHROPIC_CODE_FIELDS = ("type", "code")


def translate_stream_event(record: Any) -> Optional[str]:
    """Map one decoded stream event to its text delta (or ``None``)."""
    if not isinstance(record, dict) or record.get("type") != "content_block_delta":
        return None
    text = get_path(record, "delta", "text")
    return text if isinstance(text, str) else None


def detect_stream_error(record: Any):
    if isinstance(record, dict) and record.get("type") == "error":
        code, message = error_from_record(record, ANTHROPIC_CODE_FIELDS)
        return code, message or "stream reported an error"
    return None


def extract_message_text(record: Any) -> Optional[str]:
    """Concatenate the ``text`` blocks of a non-streaming reply."""
    blocks = get_path(record, "content")
    if not isinstance(blocks, list):
        return None
    return "".join(b.get("text") or "" for b in blocks if isinstance(b, dict) and b.get("type", "text") == "text")


ANTHROPIC_DIALECT = StreamDialect(
    name="anthropic.messages",
    extract_delta=translate_stream_event,
    sentinel=None,
    detect_error=detect_stream_error,
)

__all__ = [
    "ANTHROPIC_CODE_FIELDS",
    "ANTHROPIC_DIALECT",
    "translate_stream_event",
    "detect_stream_error",
    "extract_message_text",
]

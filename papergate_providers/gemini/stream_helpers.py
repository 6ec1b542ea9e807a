"""Gemini stream decoding.

``streamGenerateContent?alt=sse`` emits one ``GenerateContentResponse`` per
``data:`` line with no ``[DONE]`` sentinel; each carries only the new text.
Some relays nest the increment under ``candidates[0].delta`` instead of
``candidates[0].content``, so both shapes are accepted.
"""

from __future__ import annotations

from typing import Any, Optional

from ..base.openai_style_parts import detect_top_level_error
from ..base.streaming import StreamDialect
from ..base.utils.json_safe import get_path


def _join_parts(parts: Any) -> Optional[str]:
    if not isinstance(parts, list):
        return None
    return "".join(
        p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str)
    )


def extract_gemini_text(record: Any) -> Optional[str]:
    """Concatenated ``text`` of the first candidate's parts.

    Lookup order: ``delta.content.parts``, ``delta.parts``, ``content.parts``.
    """
    candidate = get_path(record, "candidates", 0)
    if not isinstance(candidate, dict):
        return None
    parts = get_path(candidate, "delta", "content", "parts") or get_path(candidate, "delta", "parts")
    if parts is None:
        parts = get_path(candidate, "content", "parts")
    return _join_parts(parts)


GEMINI_DIALECT = StreamDialect(
    name="gemini.sse",
    extract_delta=extract_gemini_text,
    sentinel=None,
    detect_error=detect_top_level_error,
)

__all__ = ["GEMINI_DIALECT", "extract_gemini_text"]

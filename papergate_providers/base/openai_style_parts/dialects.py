"""Stream dialects for the two OpenAI wire formats."""
from __future__ import annotations

from ..streaming import StreamDialect
from .style_helpers import (
    detect_responses_error,
    detect_top_level_error,
    extract_chat_delta,
    extract_responses_delta,
)

CHAT_COMPLETIONS_DIALECT = StreamDialect(
    name="openai.chat_completions",
    extract_delta=extract_chat_delta,
    detect_error=detect_top_level_error,
)

RESPONSES_DIALECT = StreamDialect(
    name="openai.responses",
    extract_delta=extract_responses_delta,
    detect_error=detect_responses_error,
)

__all__ = ["CHAT_COMPLETIONS_DIALECT", "RESPONSES_DIALECT"]

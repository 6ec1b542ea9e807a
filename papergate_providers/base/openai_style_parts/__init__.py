"""Building blocks for OpenAI-style dialects.

Split into focused modules (one payload family per file) and re-exported
here as a stable import surface for the OpenAI, OpenAI-compatible,
OpenRouter and Ark adapters.
"""

from .chat_payload import ChatCompletionsPayload, ChatContentPart, ChatMessage
from .dialects import CHAT_COMPLETIONS_DIALECT, RESPONSES_DIALECT
from .responses_payload import ResponsesContentPart, ResponsesInputItem, ResponsesPayload
from .style_helpers import (
    derive_v1_endpoint,
    detect_responses_error,
    detect_top_level_error,
    extract_chat_delta,
    extract_chat_message,
    extract_responses_delta,
    extract_responses_output,
)

__all__ = [
    "ChatCompletionsPayload",
    "ChatContentPart",
    "ChatMessage",
    "ResponsesContentPart",
    "ResponsesInputItem",
    "ResponsesPayload",
    "CHAT_COMPLETIONS_DIALECT",
    "RESPONSES_DIALECT",
    "derive_v1_endpoint",
    "detect_responses_error",
    "detect_top_level_error",
    "extract_chat_delta",
    "extract_chat_message",
    "extract_responses_delta",
    "extract_responses_output",
]

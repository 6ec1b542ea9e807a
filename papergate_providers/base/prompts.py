"""Prompt text shared by every adapter.

Document text is wrapped in ``<Paper>`` tags so models can tell the
instruction from the paper. An optional answer-language line (vendor option
``answer_language``) is inserted between them.
"""
from __future__ import annotations

from typing import Optional, Sequence

from .constants import PDF_MIME_TYPE
from .models import ConversationMessage

SYSTEM_ROLE_PROMPT = "You are a helpful academic assistant."
DEFAULT_SUMMARY_PROMPT = "Summarize this paper: its research question, methods and main findings."
CONNECTIVITY_PROMPT = "Hello! Please respond with 'OK' to confirm connection."
HISTORY_HEADER = "Previous conversation for reference:"

_ROLE_LABELS = {"assistant": "Assistant", "user": "User", "system": "System"}


def build_user_message(prompt: str, text: str, answer_language: Optional[str] = None) -> str:
    """Combine the instruction and raw document text into one user turn."""
    parts = [prompt or ""]
    if answer_language:
        parts.append(f"Please answer in {answer_language}.")
    parts.append(f"<Paper>\n{text}\n</Paper>")
    return "\n\n".join(parts)


def pdf_data_url(encoded: str) -> str:
    return f"data:{PDF_MIME_TYPE};base64,{encoded}"


def flatten_history(messages: Sequence[ConversationMessage]) -> str:
    """Render turns as labelled plain text for dialects without multi-turn file input.

    Returns an empty string when there is nothing to render.
    """
    lines = [f"{_ROLE_LABELS.get(m.role, m.role)}: {m.content}" for m in messages if m.content]
    if not lines:
        return ""
    return HISTORY_HEADER + "\n" + "\n\n".join(lines)


__all__ = [
    "SYSTEM_ROLE_PROMPT",
    "DEFAULT_SUMMARY_PROMPT",
    "CONNECTIVITY_PROMPT",
    "HISTORY_HEADER",
    "build_user_message",
    "pdf_data_url",
    "flatten_history",
]

"""
Helper utilities shared by OpenAI-style dialects.

Purpose:
- Derive versioned endpoints from a configured base URL so operators can
  paste either the bare host, any ``/v1/...`` endpoint, or the exact target.
- Pull text out of decoded Chat Completions and Responses records without
  raising on unexpected shapes.

External dependencies:
- None beyond the never-raising JSON path helper; no network I/O.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from ..errors import error_from_record
from ..utils.json_safe import get_path

_V1_SUFFIX_RE = re.compile(r"/v1/.+$", re.IGNORECASE)


def derive_v1_endpoint(base_url: str, path: str) -> str:
    """Return ``{base}/v1/{path}`` honoring what the operator configured.

    Rules, in order:
    - a URL already ending in ``/v1/{path}`` is kept;
    - any other ``/v1/...`` suffix is replaced by ``/v1/{path}``;
    - a URL ending in ``/v1`` gets ``/{path}`` appended;
    - otherwise ``/v1/{path}`` is appended.

    Parameters:
        base_url: Configured URL (host, versioned root or full endpoint).
        path: Endpoint path below ``/v1`` such as ``"responses"``.

    Returns:
        The absolute endpoint URL.
    """
    url = (base_url or "").strip()
    target = f"/v1/{path.strip('/')}"
    if url.rstrip("/").lower().endswith(target.lower()):
        return url.rstrip("/")
    if _V1_SUFFIX_RE.search(url):
        return _V1_SUFFIX_RE.sub(target, url)
    trimmed = url.rstrip("/")
    if trimmed.lower().endswith("/v1"):
        return trimmed + target[len("/v1"):]
    return trimmed + target


def extract_chat_delta(record: Any) -> Optional[str]:
    """``choices[0].delta.content`` of a Chat Completions stream chunk."""
    delta = get_path(record, "choices", 0, "delta", "content")
    return delta if isinstance(delta, str) else None


def extract_chat_message(record: Any) -> Optional[str]:
    """``choices[0].message.content`` of a non-streaming Chat Completions reply."""
    content = get_path(record, "choices", 0, "message", "content")
    return content if isinstance(content, str) else None


def detect_top_level_error(record: Any):
    """Treat a record with a top-level ``error`` object as an in-band failure."""
    if isinstance(record, dict) and record.get("error"):
        code, message = error_from_record(record)
        return code, message or "stream reported an error"
    return None


def extract_responses_delta(record: Any) -> Optional[str]:
    """``delta`` of a ``response.output_text.delta`` event; other events carry none."""
    if not isinstance(record, dict) or record.get("type") != "response.output_text.delta":
        return None
    delta = record.get("delta")
    return delta if isinstance(delta, str) else None


def detect_responses_error(record: Any):
    """In-band ``error`` and ``response.failed`` events of the Responses stream."""
    if not isinstance(record, dict):
        return None
    kind = record.get("type")
    if kind == "error":
        code, message = error_from_record(record)
        return code, message or "stream reported an error"
    if kind == "response.failed":
        code, message = error_from_record(get_path(record, "response", "error", default={}))
        return code, message or "response failed"
    return None


def extract_responses_output(record: Any, *, include_reasoning: bool = False) -> Optional[str]:
    """Text of a non-streaming Responses reply.

    Prefers the ``output_text`` convenience field, then concatenates every
    ``output_text`` part of ``message`` items in ``output`` (plus
    ``summary_text`` of ``reasoning`` items when ``include_reasoning``), and
    finally falls back to the Chat Completions shape some relays return.
    """
    direct = get_path(record, "output_text")
    if isinstance(direct, str) and direct:
        return direct
    texts = []
    for item in get_path(record, "output", default=[]) or []:
        if not isinstance(item, dict):
            continue
        if item.get("type") == "message":
            for part in item.get("content") or []:
                if isinstance(part, dict) and part.get("type") == "output_text" and part.get("text"):
                    texts.append(part["text"])
        elif include_reasoning and item.get("type") == "reasoning":
            for part in item.get("summary") or []:
                if isinstance(part, dict) and part.get("type") == "summary_text" and part.get("text"):
                    texts.append(part["text"])
    if texts:
        return "".join(texts)
    return extract_chat_message(record)


__all__ = [
    "derive_v1_endpoint",
    "extract_chat_delta",
    "extract_chat_message",
    "detect_top_level_error",
    "extract_responses_delta",
    "detect_responses_error",
    "extract_responses_output",
]

"""
Never-raising JSON helpers.

Stream parsing treats every decoded record as untrusted: a single malformed
line must never abort a stream, and extractors must tolerate any shape a
vendor (or a misbehaving relay) sends.
"""
from __future__ import annotations

import json
from typing import Any, Optional, Union


def safe_json_parse(text: Optional[Union[str, bytes]]) -> Any:
    """Decode ``text`` as JSON, returning ``None`` on any failure.

    Parameters
    ----------
    text: str | bytes | None
        Raw JSON text. ``None`` and empty input return ``None``.

    Returns
    -------
    Any
        The decoded value, or ``None`` when the input is not valid JSON.
    """
    if not text:
        return None
    try:
        return json.loads(text)
    except (TypeError, ValueError):
        return None


def get_path(data: Any, *path: Union[str, int], default: Any = None) -> Any:
    """Walk nested dicts/lists without raising.

    ``get_path(rec, "choices", 0, "delta", "content")`` returns the content
    string or ``default`` if any hop is missing or has the wrong type.
    """
    cur = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(cur, list) or not -len(cur) <= key < len(cur):
                return default
            cur = cur[key]
        else:
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
    return default if cur is None else cur


__all__ = ["safe_json_parse", "get_path"]

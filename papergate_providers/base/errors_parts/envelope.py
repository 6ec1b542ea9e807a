"""
Vendor error envelope parsing.

Vendors wrap failures differently:

- OpenAI / relays: ``{"error": {"message", "type", "code"}}``
- Anthropic: ``{"type": "error", "error": {"type", "message"}}``
- Gemini: ``{"error": {"code": 400, "message", "status"}}`` (sometimes a list)
- Ark: ``{"error": {"code", "message", "type"}}``

``parse_error_envelope`` normalizes all of them to a ``(code, message)`` pair
without ever raising; callers choose which identifier fields to prefer.
"""
from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple

from ..utils.json_safe import safe_json_parse

DEFAULT_CODE_FIELDS: Tuple[str, ...] = ("code", "type", "status")


def _first_text(obj: dict, fields: Sequence[str]) -> Optional[str]:
    for name in fields:
        val = obj.get(name)
        if val is None or val == "":
            continue
        return str(val)
    return None


def error_from_record(record: Any, code_fields: Sequence[str] = DEFAULT_CODE_FIELDS) -> Tuple[Optional[str], Optional[str]]:
    """Extract ``(code, message)`` from an already-decoded error record."""
    if isinstance(record, list) and record:
        record = record[0]
    if not isinstance(record, dict):
        return None, None
    err = record.get("error", record)
    if isinstance(err, str):
        return None, err
    if not isinstance(err, dict):
        return None, None
    return _first_text(err, code_fields), _first_text(err, ("message", "msg", "detail"))


def parse_error_envelope(
    body: Optional[str], code_fields: Sequence[str] = DEFAULT_CODE_FIELDS
) -> Tuple[Optional[str], Optional[str]]:
    """Parse a raw error response body into ``(code, message)``.

    Non-JSON bodies yield ``(None, <trimmed body>)`` so plain-text proxy
    errors still reach the caller.
    """
    if not body:
        return None, None
    record = safe_json_parse(body)
    if record is None:
        text = body.strip()
        return None, (text[:500] if text else None)
    return error_from_record(record, code_fields)


__all__ = ["parse_error_envelope", "error_from_record", "DEFAULT_CODE_FIELDS"]

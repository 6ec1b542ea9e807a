# -*- coding: utf-8 -*-
"""Utility helpers shared by the CLI handlers.

Functions
---------
- ``parse_verbosity(value)``: Map user strings and synonyms to a canonical
  logging level name.
- ``suppress_console_logs()``: Context manager to temporarily detach console
  handlers while preserving file handlers, so JSON log lines do not
  interleave with streamed text.
- ``emit_json(payload, stream)``: Write one JSON document to a stream.
"""

from __future__ import annotations

import contextlib
import json
import logging
from typing import Any, Iterator, List, Optional, TextIO, Tuple


def parse_verbosity(value: str) -> Optional[str]:
    """Parse a user-provided verbosity string into a canonical level.

    Accepted values (case-insensitive):
    - Canonical: DEBUG, INFO, WARNING, ERROR, CRITICAL
    - Synonyms: verbose->DEBUG; low->INFO; med/medium/warn->WARNING;
      high/err/quiet->ERROR; crit/silent->CRITICAL

    Returns
    -------
    Optional[str]
        Canonical upper-cased level, or ``None`` if invalid.
    """
    mapping = {
        "debug": "DEBUG",
        "verbose": "DEBUG",
        "info": "INFO",
        "low": "INFO",
        "warning": "WARNING",
        "warn": "WARNING",
        "medium": "WARNING",
        "med": "WARNING",
        "error": "ERROR",
        "err": "ERROR",
        "high": "ERROR",
        "quiet": "ERROR",
        "critical": "CRITICAL",
        "crit": "CRITICAL",
        "silent": "CRITICAL",
    }
    return mapping.get(value.strip().lower())


def emit_json(payload: Any, stream: TextIO) -> None:
    stream.write(json.dumps(payload, ensure_ascii=False, indent=2, default=str) + "\n")


@contextlib.contextmanager
def suppress_console_logs() -> Iterator[None]:
    """Temporarily detach console handlers from the ``providers`` logger.

    Managed file handlers (tagged ``_providers_file_handler``) stay attached;
    original handlers are restored on exit.
    """
    base = logging.getLogger("providers")
    detached: List[Tuple[logging.Handler, int]] = []
    try:
        for handler in list(base.handlers):
            if getattr(handler, "_providers_file_handler", False):
                continue
            if isinstance(handler, logging.StreamHandler):
                handler.flush()
                detached.append((handler, handler.level))
                base.removeHandler(handler)
        yield
    finally:
        for handler, level in detached:
            handler.setLevel(level)
            base.addHandler(handler)


__all__ = ["parse_verbosity", "suppress_console_logs", "emit_json"]
